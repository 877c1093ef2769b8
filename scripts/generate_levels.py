"""
PolySum — Level Batch Generator
Generates a batch of levels, vets each with the winnability checker and
writes them as JSON into levels/.
Run: python scripts/generate_levels.py [count] [target] [decoys]
"""

import sys
from pathlib import Path

from polysum.modules.generation import generate_level_parallel
from polysum.modules.winnability import check_winnability
from polysum.utils.level_io import save_level
from polysum.utils.logger import configure_logging, game_context

# ─── Paths ───────────────────────────────────────────────────────────────────
SCRIPT_DIR = Path(__file__).parent
ROOT_DIR = SCRIPT_DIR.parent
LEVELS_DIR = ROOT_DIR / "levels"

DEFAULT_COUNT = 5
DEFAULT_TARGET = 30
DEFAULT_DECOYS = 3


def _arg(index: int, default: int) -> int:
    return int(sys.argv[index]) if len(sys.argv) > index else default


def main() -> None:
    count = _arg(1, DEFAULT_COUNT)
    target = _arg(2, DEFAULT_TARGET)
    decoys = _arg(3, DEFAULT_DECOYS)

    configure_logging()
    print("\n🧩 PolySum — Level Generation\n" + "─" * 40)
    print(f"Output directory: {LEVELS_DIR}")
    print(f"Levels: {count}  target: {target}  decoys: {decoys}\n")

    written = 0
    for i in range(1, count + 1):
        level_id = f"level_{i:03d}"
        with game_context(level_id=level_id):
            level = generate_level_parallel(target, decoys, level_id=level_id)
            if level is None:
                print(f"  ✗ {level_id}: generator gave up — try another target.")
                continue
            verdict = check_winnability(level)

        path = save_level(level, LEVELS_DIR / f"{level_id}.json")
        print(
            f"  ✓ {level_id}: {len(level.bag)} pieces, "
            f"{verdict.confidence.value} winnable → {path.name}"
        )
        written += 1

    print("\n" + "─" * 40)
    print(f"✅ {written}/{count} levels written.\n")
    if written < count:
        sys.exit(1)


if __name__ == "__main__":
    main()
