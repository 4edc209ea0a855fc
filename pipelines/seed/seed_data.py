"""
Seed data generator -- creates a realistic sample sales dataset.

Generates ~1 000 order lines with columns:
  data, cliente, produto, categoria, regiao, quantidade, valor

Written to ``data/sample_sales.csv`` so it can be uploaded from the UI or
used by the evaluation harness.
Run:  python -m pipelines.seed.seed_data
"""
from __future__ import annotations

import random
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any

from faker import Faker

from src.data.parsers import to_csv
from src.interpreter.dataset import Dataset

_PROJECT_ROOT = Path(__file__).resolve().parents[2]
OUTPUT_PATH = _PROJECT_ROOT / "data" / "sample_sales.csv"

# ── Tunables ─────────────────────────────────────────────
NUM_ROWS = 1_000
NUM_CUSTOMERS = 40
SEED = 42

COLUMNS = ["data", "cliente", "produto", "categoria", "regiao", "quantidade", "valor"]

CATEGORIES: dict[str, list[str]] = {
    "eletronicos": ["notebook", "monitor", "teclado", "mouse"],
    "moveis": ["cadeira", "mesa", "estante"],
    "papelaria": ["caderno", "caneta", "grampeador"],
    "limpeza": ["detergente", "desinfetante"],
}
REGIONS = ["sul", "sudeste", "norte", "nordeste", "centro-oeste"]
REGION_WEIGHTS = [0.20, 0.45, 0.05, 0.20, 0.10]

DATE_START = datetime(2024, 1, 1)
DATE_END = datetime(2025, 12, 31)
DATE_RANGE_DAYS = (DATE_END - DATE_START).days


def build_sample_rows(num_rows: int = NUM_ROWS, seed: int = SEED) -> list[dict[str, Any]]:
    """Deterministic rows for a given *seed*; a few customers dominate."""
    rng = random.Random(seed)
    fake = Faker("pt_BR")
    fake.seed_instance(seed)

    customers = [fake.unique.company() for _ in range(NUM_CUSTOMERS)]
    weights = [1.0 / (i + 1) for i in range(NUM_CUSTOMERS)]

    rows: list[dict[str, Any]] = []
    for _ in range(num_rows):
        category = rng.choice(list(CATEGORIES))
        qty = rng.randint(1, 20)
        unit_price = round(rng.uniform(5, 2_000), 2)
        day = DATE_START + timedelta(days=rng.randint(0, DATE_RANGE_DAYS))
        rows.append({
            "data": day.strftime("%Y-%m-%d"),
            "cliente": rng.choices(customers, weights=weights)[0],
            "produto": rng.choice(CATEGORIES[category]),
            "categoria": category,
            "regiao": rng.choices(REGIONS, weights=REGION_WEIGHTS)[0],
            "quantidade": str(qty),
            "valor": f"{qty * unit_price:.2f}",
        })
    return rows


def build_sample_dataset(num_rows: int = NUM_ROWS, seed: int = SEED) -> Dataset:
    return Dataset(columns=COLUMNS, rows=build_sample_rows(num_rows, seed))


def main():
    dataset = build_sample_dataset()
    OUTPUT_PATH.parent.mkdir(parents=True, exist_ok=True)
    OUTPUT_PATH.write_text(to_csv(dataset.rows, dataset.columns) + "\n", encoding="utf-8")
    print(f"Wrote {dataset.row_count} rows to {OUTPUT_PATH}")


if __name__ == "__main__":
    main()
