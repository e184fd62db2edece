#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

import requests

from heatlibs.fn__libs import DATA_URL, f110__parse_dataset
from heatlibs.fn__libs_models import EmptyDatasetError, MalformedRecordError

HERE = Path(__file__).resolve()
DATA_DIR = HERE.parent.parent
OUT_PATH = DATA_DIR / "global-temperature.json"


def download_json(url: str, timeout: float = 60) -> dict:
    r = requests.get(url, timeout=timeout)
    r.raise_for_status()
    return r.json()


def write_json(payload: dict, out_path: Path, overwrite: bool = False) -> bool:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    if out_path.exists() and not overwrite:
        return False
    tmp = out_path.with_suffix(out_path.suffix + ".part")
    with tmp.open("w", encoding="utf-8") as f:
        json.dump(payload, f)
    tmp.replace(out_path)
    return True


def main() -> None:
    p = argparse.ArgumentParser(description="Download the monthly global temperature dataset and validate it.")
    p.add_argument("--url", default=DATA_URL, help="Dataset URL (default: freeCodeCamp reference data).")
    p.add_argument("--out", default=str(OUT_PATH), help="Output JSON path.")
    p.add_argument("--overwrite", action="store_true", help="Overwrite an existing file.")
    args = p.parse_args()

    print(f"Downloading: {args.url}")
    try:
        payload = download_json(args.url)
    except requests.RequestException as e:
        print(f"[ERROR] download failed: {e}")
        sys.exit(1)

    try:
        dataset = f110__parse_dataset(payload)
    except (EmptyDatasetError, MalformedRecordError) as e:
        print(f"[ERROR] invalid dataset: {e}")
        sys.exit(1)

    print(
        f"[OK] {len(dataset):,} records, {dataset.first_year}-{dataset.last_year}, "
        f"base temperature {dataset.base_temperature}°C"
    )

    out_path = Path(args.out).expanduser().resolve()
    if write_json(payload, out_path, overwrite=args.overwrite):
        print(f"[DONE] written → {out_path}")
    else:
        print(f"[WARN] {out_path} exists, use --overwrite to replace it")


if __name__ == "__main__":
    main()
