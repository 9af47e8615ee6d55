#!/usr/bin/env python3
"""
Prerequisite checker for salvo.

Run from repo root (after activating your venv):

    python3 scripts/check_prereqs.py
"""

import random
import sys
import traceback
from pathlib import Path


def add_src_to_syspath() -> None:
    """Ensure `src/` is on sys.path so `import salvo` works without installing."""
    repo_root = Path(__file__).resolve().parents[1]
    src = repo_root / "src"
    if str(src) not in sys.path:
        sys.path.insert(0, str(src))


def header(title: str) -> None:
    print("\n" + "=" * 72)
    print(title)
    print("=" * 72)


def check_python_version() -> bool:
    header("1) Python version")
    v = sys.version_info
    print(f"Detected Python: {v.major}.{v.minor}.{v.micro}")
    ok = (v.major == 3 and v.minor >= 10) or (v.major > 3)
    if ok:
        print("OK: Python 3.10 or newer is available.")
    else:
        print("FAIL: Python 3.10+ required for this project.")
    return ok


def check_core_imports() -> bool:
    header("2) Library imports (pydantic, opentelemetry SDK + OTLP exporter)")
    libs = [
        "pydantic",
        "opentelemetry.sdk.trace",
        "opentelemetry.exporter.otlp.proto.grpc.trace_exporter",
        "opentelemetry.instrumentation.logging",
    ]
    all_ok = True
    for name in libs:
        try:
            __import__(name)
            print(f"OK: imported {name}")
        except Exception as exc:  # noqa: BLE001
            all_ok = False
            print(f"FAIL: could not import {name}: {exc}")
            traceback.print_exc(limit=1)
    return all_ok


def check_salvo_imports() -> bool:
    header("3) salvo engine imports")
    add_src_to_syspath()
    ok = True
    try:
        from salvo.engine.battlefield import Battlefield  # noqa: F401
        from salvo.engine.game import Game  # noqa: F401
        from salvo.engine.placement import generate_fleet  # noqa: F401

        print("OK: imported Battlefield, Game, generate_fleet")
    except Exception as exc:  # noqa: BLE001
        ok = False
        print(f"FAIL: could not import salvo modules: {exc}")
        traceback.print_exc(limit=1)
    return ok


def check_game_smoke_test() -> bool:
    header("4) Game smoke test (seeded fleet, fire at every cell)")
    add_src_to_syspath()
    try:
        from salvo.config import GameSettings
        from salvo.engine.game import Game
        from salvo.engine.notation import format_target

        game = Game(GameSettings(seed=7), rng=random.Random(7))
        ships = game.battlefield.all_ships()
        print(f"OK: placed {len(ships)} ships on a {game.settings.size}x{game.settings.size} grid.")
        for y in range(game.settings.size):
            for x in range(game.settings.size):
                if game.is_over():
                    break
                game.fire(format_target(x, y))
        if not game.is_over():
            print("FAIL: fleet still afloat after firing at every cell")
            return False
        print(f"    Fleet sunk after {game.shots_fired} shots.")
        return True
    except Exception as exc:  # noqa: BLE001
        print(f"FAIL: game smoke test failed: {exc}")
        traceback.print_exc(limit=1)
        return False


def main() -> None:
    checks = [
        ("Python version", check_python_version),
        ("Library imports", check_core_imports),
        ("salvo imports", check_salvo_imports),
        ("Game smoke test", check_game_smoke_test),
    ]

    overall_ok = True
    results: list[tuple[str, bool]] = []

    for name, fn in checks:
        ok = fn()
        results.append((name, ok))
        overall_ok = overall_ok and ok

    header("Summary")
    for name, ok in results:
        status = "OK  " if ok else "FAIL"
        print(f"{status} - {name}")

    print("\n" + "=" * 72)
    if overall_ok:
        print("ALL CHECKS PASSED: you are ready to play.")
        print("Next step example:")
        print("    salvo --seed 42")
    else:
        print("Some checks FAILED. Review the messages above and fix them before playing.")
    print("=" * 72)


if __name__ == "__main__":
    main()
