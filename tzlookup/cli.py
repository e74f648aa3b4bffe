"""Command line interface for timezone lookups."""
import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

import pandas as pd
from tqdm import tqdm

from tzlookup.core.config import (
    COARSE_DATABASE_PATH,
    COARSE_RESOLUTION,
    FINE_DATABASE_PATH,
    FINE_RESOLUTION,
    LOG_LEVEL,
)
from tzlookup.core.exceptions import DatabaseOpenError
from tzlookup.core.resolver import TimeZoneResolver
from tzlookup.utils.error_tracking import setup_error_tracking
from tzlookup.utils.logging import log_error, setup_logging
from tzlookup.utils.timing import Timer

OUTPUT_COLUMNS = ["timezone", "country_name", "country_alpha2"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Resolve coordinates to IANA timezones offline"
    )
    parser.add_argument("latitude", type=float, nargs="?", help="Latitude in degrees")
    parser.add_argument("longitude", type=float, nargs="?", help="Longitude in degrees")
    parser.add_argument("--full", action="store_true",
                       help="Print timezone and country as JSON (no corrections applied)")
    parser.add_argument("--csv", type=Path, help="Input CSV with one coordinate per row")
    parser.add_argument("--output", type=Path, help="Output CSV (default: overwrite input)")
    parser.add_argument("--lat-field", default="lat", help="Latitude column (default: lat)")
    parser.add_argument("--lon-field", default="lon", help="Longitude column (default: lon)")
    parser.add_argument("--coarse-db", type=Path, default=COARSE_DATABASE_PATH,
                       help="Low resolution polygon database")
    parser.add_argument("--fine-db", type=Path, default=FINE_DATABASE_PATH,
                       help="High resolution polygon database")
    parser.add_argument("--coarse-resolution", type=float, default=COARSE_RESOLUTION,
                       help="Nominal coarse resolution in degrees")
    parser.add_argument("--fine-resolution", type=float, default=FINE_RESOLUTION,
                       help="Nominal fine resolution in degrees")
    parser.add_argument("--log-level", default=LOG_LEVEL, help="Logging level")
    return parser


def resolve_csv(resolver: TimeZoneResolver, df: pd.DataFrame, lat_field: str, lon_field: str) -> pd.DataFrame:
    """
    Add timezone and country columns to a DataFrame of coordinates.
    
    The timezone column uses the corrected lookup; country columns come from
    the full lookup and stay empty when it misses.
    
    Args:
        resolver: Open resolver
        df: Rows with latitude and longitude columns
        lat_field: Latitude column name
        lon_field: Longitude column name
        
    Returns:
        Copy of df with the output columns filled in
    """
    df = df.copy()
    rows = {column: [None] * len(df) for column in OUTPUT_COLUMNS}
    
    valid = df[lat_field].notna() & df[lon_field].notna()
    positions = [i for i, ok in enumerate(valid) if ok]
    coordinates = list(zip(df.loc[valid, lat_field], df.loc[valid, lon_field]))
    
    timezones = resolver.simple_many(tqdm(coordinates, desc="Resolving timezones"))
    results = resolver.lookup_many(coordinates)
    
    for position, timezone, result in zip(positions, timezones, results):
        rows["timezone"][position] = timezone
        rows["country_name"][position] = result.country_name if result else None
        rows["country_alpha2"][position] = result.country_alpha2 if result else None
    
    for column in OUTPUT_COLUMNS:
        df[column] = rows[column]
    return df


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    
    if args.csv is None and (args.latitude is None or args.longitude is None):
        parser.error("either LATITUDE LONGITUDE or --csv is required")
    
    setup_logging(args.log_level)
    setup_error_tracking()
    
    try:
        resolver = TimeZoneResolver(
            args.coarse_db,
            args.fine_db,
            coarse_resolution=args.coarse_resolution,
            fine_resolution=args.fine_resolution
        )
    except DatabaseOpenError as e:
        log_error(e, {"role": e.role})
        print(f"Error: {e}", file=sys.stderr)
        return 2
    
    with resolver:
        if args.csv is not None:
            if not args.csv.exists():
                print(f"Error: File not found: {args.csv}", file=sys.stderr)
                return 1
            
            df = pd.read_csv(args.csv)
            missing = [field for field in (args.lat_field, args.lon_field) if field not in df.columns]
            if missing:
                print(f"Error: CSV missing required fields: {', '.join(missing)}", file=sys.stderr)
                return 1
            
            with Timer("resolve_csv", rows=len(df)):
                df = resolve_csv(resolver, df, args.lat_field, args.lon_field)
            
            output = args.output or args.csv
            df.to_csv(output, index=False)
            resolved = int(df["timezone"].notna().sum())
            print(f"✅ Resolved {resolved}/{len(df)} rows, written to {output}")
            return 0
        
        if args.full:
            result = resolver.lookup(args.latitude, args.longitude)
            if result is None:
                print("No timezone found", file=sys.stderr)
                return 1
            print(json.dumps(result.to_dict(), ensure_ascii=False))
            return 0
        
        timezone = resolver.simple(args.latitude, args.longitude)
        if timezone is None:
            print("No timezone found", file=sys.stderr)
            return 1
        print(timezone)
        return 0


if __name__ == "__main__":
    sys.exit(main())
