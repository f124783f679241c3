#!/usr/bin/env python3
"""Generate ready-made YAML boards for the headless runner."""
from __future__ import annotations

import argparse
from pathlib import Path

import yaml


def open_board() -> dict:
    return {"board": {"width": 20, "height": 15}}


def fortress_board() -> dict:
    # ring of walls around the centre target, open on the east side
    cx, cy = 10, 7
    walls = [
        [cx - 2, cy - 2, cx + 2, cy - 2],
        [cx - 2, cy + 2, cx + 2, cy + 2],
        [cx - 2, cy - 1, cx - 2, cy + 1],
        [cx + 2, cy - 1, cx + 2, cy - 1],
        [cx + 2, cy + 1, cx + 2, cy + 1],
    ]
    return {"board": {"width": 20, "height": 15, "target": [cx, cy], "walls": walls}}


def maze_board() -> dict:
    walls = []
    for column in range(3, 19, 4):
        if (column // 4) % 2 == 0:
            walls.append([column, 0, column, 12])
        else:
            walls.append([column, 2, column, 14])
    return {"board": {"width": 20, "height": 15, "target": [19, 7], "walls": walls}}


PRESETS = {
    "open": open_board,
    "fortress": fortress_board,
    "maze": maze_board,
}


def write_preset(path: Path, data: dict, overwrite: bool) -> None:
    if path.exists() and not overwrite:
        raise FileExistsError(f"{path} already exists. Use --overwrite to replace.")
    path.write_text(yaml.safe_dump(data, sort_keys=False))


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate preset board configurations.")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("configs"),
        help="Directory to write presets into.",
    )
    parser.add_argument(
        "--overwrite", action="store_true", help="Overwrite existing files."
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    output_dir: Path = args.output_dir
    output_dir.mkdir(parents=True, exist_ok=True)

    for name, build in PRESETS.items():
        write_preset(output_dir / f"{name}.yaml", build(), args.overwrite)

    print(f"Generated board presets in {output_dir}")


if __name__ == "__main__":
    main()
