#!/usr/bin/env python3
"""
Seed the feature store from the credit-card dataset CSV
Usage: python -m fraudcheck.jobs.seed_store --csv creditcard.csv --limit 1000

Input columns: Time, V1..V28, Amount, Class
Each row becomes one user-keyed feature record the gateway enriches from.
"""
import argparse
import asyncio
import logging
import sys
from typing import Any, Dict, List, Optional

import pandas as pd

from fraudcheck.config import Settings, setup_logging
from fraudcheck.database.redis_client import BaseFeatureStore, RedisFeatureStore
from fraudcheck_features.constants import (
    AMOUNT_FIELD,
    FEATURE_VECTOR_LENGTH,
    LABEL_FIELD,
    RECORD_ID_FIELD,
    SET_NAME_FIELD,
    TIME_FIELD,
)
from fraudcheck_features.features import FeatureEngineering

logger = logging.getLogger(__name__)

# CSV columns V1..V28 -> record fields v0..v27
PCA_COLUMNS = [f"V{i}" for i in range(1, FEATURE_VECTOR_LENGTH)]
REQUIRED_COLUMNS = ["Time", "Amount", "Class"] + PCA_COLUMNS


def load_dataset(csv_path: str, limit: Optional[int] = None) -> pd.DataFrame:
    """Read the CSV and check the expected columns are there"""
    df = pd.read_csv(csv_path, nrows=limit)

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"CSV is missing columns: {missing}")

    return df


def row_to_record(row: Dict[str, Any], record_id: str, set_name: str) -> Dict[str, Any]:
    """One CSV row -> stored feature record"""
    record = {
        RECORD_ID_FIELD: record_id,
        SET_NAME_FIELD: set_name,
        TIME_FIELD: float(row["Time"]),
        AMOUNT_FIELD: float(row["Amount"]),
        LABEL_FIELD: str(int(row["Class"])),
    }
    component_fields = FeatureEngineering.component_fields(FEATURE_VECTOR_LENGTH)
    for field, column in zip(component_fields, PCA_COLUMNS):
        record[field] = float(row[column])
    return record


def build_records(
    df: pd.DataFrame,
    set_name: str,
    id_column: Optional[str] = None,
    id_prefix: str = ""
) -> List[Dict[str, Any]]:
    """
    Turn the dataframe into records keyed by user id

    The key is `id_prefix` + the value of `id_column`, or + the row index
    when no id column is given.
    """
    if id_column and id_column not in df.columns:
        raise ValueError(f"id column {id_column!r} not in CSV")

    # NaN in PCA / amount columns -> 0, rows without a class are unusable
    df = df.dropna(subset=["Class"])
    if id_column:
        df = df.dropna(subset=[id_column])
    df = df.fillna({c: 0.0 for c in PCA_COLUMNS + ["Time", "Amount"]})

    records = []
    for index, row in zip(df.index, df.to_dict(orient="records")):
        key = row[id_column] if id_column else index
        # NaN elsewhere in the id column turns ints into floats (42 -> 42.0)
        if isinstance(key, float) and key.is_integer():
            key = int(key)
        records.append(row_to_record(row, f"{id_prefix}{key}", set_name))
    return records


async def seed(store: BaseFeatureStore, records: List[Dict[str, Any]], settings: Settings) -> int:
    """Write records to the store, return how many were written"""
    written = 0
    for record in records:
        await store.put(settings.namespace, settings.set_name, record[RECORD_ID_FIELD], record)
        written += 1
        if written % 1000 == 0:
            logger.info(f"Progress: {written:,}/{len(records):,} records")
    return written


async def run_seed(args, settings: Settings) -> int:
    df = load_dataset(args.csv, args.limit)
    records = build_records(df, settings.set_name, args.id_column, args.id_prefix)

    fraud_count = sum(1 for r in records if r[LABEL_FIELD] == "1")
    logger.info(f"Loaded {len(records):,} rows ({fraud_count:,} fraud) from {args.csv}")

    store = await RedisFeatureStore.connect(settings)
    try:
        written = await seed(store, records, settings)
    finally:
        await store.close()

    logger.info(f"💾 Seeded {written:,} records into {settings.namespace}:{settings.set_name}")
    return written


def parse_args(argv=None):
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(description='FraudCheck feature store seeder')

    parser.add_argument('--csv', required=True, help='Path to the credit-card dataset CSV')
    parser.add_argument('--limit', type=int, default=None, help='Only load the first N rows')
    parser.add_argument('--id-column', default=None,
                        help='Column holding the user id (default: row index)')
    parser.add_argument('--id-prefix', default='', help='Prefix added to every user id')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')

    return parser.parse_args(argv)


def main(argv=None):
    """Main execution"""
    args = parse_args(argv)
    settings = Settings.from_env()
    setup_logging("DEBUG" if args.verbose else settings.log_level)

    try:
        asyncio.run(run_seed(args, settings))
    except KeyboardInterrupt:
        logger.warning("Seeding interrupted by user")
        sys.exit(130)
    except Exception as e:
        logger.error(f"Seeding failed: {e}", exc_info=True)
        sys.exit(1)


if __name__ == '__main__':
    main()
