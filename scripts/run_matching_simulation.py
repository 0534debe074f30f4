import argparse
import asyncio
import csv
import logging
import os
import time
from typing import List

from drivers.models import Driver
from loads.models import Load
from geo.resolver import GeocodingResolver, GeocodeCache
from matching import (
    MatchingOptions,
    find_matching_drivers,
    find_matching_drivers_async,
    get_match_quality_label,
    get_match_reasons,
)

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def _split(value):
    return [part for part in (value or "").split("|") if part]


def load_drivers(filepath="mock_drivers_100.csv") -> List[Driver]:
    drivers = []
    with open(os.path.join(BASE_DIR, filepath), 'r') as file:
        reader = csv.DictReader(file)
        for row in reader:
            drivers.append(
                Driver.new(
                    row['driver_id'],
                    row['location'],
                    trailer_types=_split(row['trailer_types']),
                    certifications=_split(row['certifications']),
                    rating=float(row['rating']) if row['rating'] else None,
                    availability=row['availability'],
                    cdl_license=row['cdl_license'],
                    cdl_expiry=row['cdl_expiry'],
                    medical_card_expiry=row['medical_card_expiry'],
                    insurance_expiry=row['insurance_expiry'],
                    motor_vehicle_record_number=row['motor_vehicle_record_number'],
                    background_check_date=row['background_check_date'],
                    pre_employment_screening_date=row['pre_employment_screening_date'],
                    drug_and_alcohol_screening_date=row['drug_and_alcohol_screening_date'],
                )
            )
    return drivers


def load_loads(filepath="raw_loads_generated.csv", limit=30) -> List[Load]:
    loads = []
    with open(os.path.join(BASE_DIR, filepath), 'r') as file:
        reader = csv.DictReader(file)
        for row in reader:
            if len(loads) >= limit: break
            loads.append(
                Load.new(
                    row['load_id'],
                    row['origin'],
                    row['destination'],
                    status=row['status'],
                    trailer_type=row['trailer_type'],
                    required_qualifications=_split(row['required_qualifications']),
                    cargo=row['cargo'],
                    weight=float(row['weight']),
                    price=float(row['price']),
                )
            )
    return loads


def run_simulation(use_geocoder: bool = False, max_results: int = 3):
    print("=== STARTING END-TO-END MATCHING SIMULATION ===")

    drivers = load_drivers()
    loads = load_loads(limit=30)
    print(f"Loaded {len(loads)} Loads and {len(drivers)} Drivers.\n")

    options = MatchingOptions(max_results=max_results)
    resolver = GeocodingResolver(cache=GeocodeCache()) if use_geocoder else None

    output_path = os.path.join(BASE_DIR, "match_results.csv")
    matched_loads = 0
    start_time = time.time()

    with open(output_path, "w", newline='') as file:
        writer = csv.writer(file)
        writer.writerow(["load_id", "rank", "driver_id", "score", "label", "reasons", "best_match"])

        for load in loads:
            if resolver:
                matches = asyncio.run(find_matching_drivers_async(load, drivers, options, resolver=resolver))
            else:
                matches = find_matching_drivers(load, drivers, options)

            if not matches:
                writer.writerow([load.id, "", "NO_MATCH", "", "", "", ""])
                print(f"[NO MATCH] Load {load.id} ({load.origin} -> {load.destination})")
                continue

            matched_loads += 1
            best = matches[0]
            print(f"[MATCHED] Load {load.id} ({load.origin}) -> {best.driver.id} "
                  f"score {best.score} ({get_match_quality_label(best.score)})")

            for match in matches:
                writer.writerow([
                    load.id,
                    match.rank,
                    match.driver.id,
                    match.score,
                    get_match_quality_label(match.score),
                    "; ".join(get_match_reasons(match.breakdown)),
                    match.is_best_match,
                ])

    print("\n=== SIMULATION COMPLETE ===")
    print(f"Loads with at least one driver: {matched_loads} / {len(loads)}")
    print(f"Ranked in {time.time() - start_time:.2f}s.")
    print(f"Results written to '{output_path}'.")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Rank mock drivers against mock loads.")
    parser.add_argument("--geocode", action="store_true", help="resolve unknown locations via the external geocoder")
    parser.add_argument("--max-results", type=int, default=3)
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    run_simulation(use_geocoder=args.geocode, max_results=args.max_results)
