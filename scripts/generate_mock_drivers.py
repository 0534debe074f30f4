import csv
import random
from datetime import date, timedelta

# Home bases the fallback table knows, plus a few it does not (geocoder or unresolved).
LOCATIONS = [
    "Miami, FL", "Orlando, FL", "Atlanta, GA", "Dallas, TX", "Houston, TX",
    "Chicago, IL", "Nashville, TN", "Charlotte, NC", "Denver, CO", "Phoenix, AZ",
    "Boise, ID", "Des Moines, IA", "Omaha, NE",
]
TRAILERS = ["dry-van", "reefer", "flatbed", "step-deck", "tanker", "hopper", "lowboy", "conestoga"]
CERTIFICATIONS = ["hazmat", "tanker endorsement", "twic", "doubles/triples"]


def _iso(days_from_today):
    return (date.today() + timedelta(days=days_from_today)).isoformat()


def generate_mock_drivers(filename="mock_drivers_100.csv", count=100):
    with open(filename, mode='w', newline='') as file:
        writer = csv.writer(file)
        writer.writerow([
            "driver_id", "location", "trailer_types", "certifications", "rating", "availability",
            "cdl_license", "cdl_expiry", "medical_card_expiry", "insurance_expiry",
            "motor_vehicle_record_number", "background_check_date",
            "pre_employment_screening_date", "drug_and_alcohol_screening_date",
        ])

        for i in range(count):
            driver_id = f"DRV-{str(i+1).zfill(3)}"

            trailers = random.sample(TRAILERS, random.randint(1, 2))
            certs = random.sample(CERTIFICATIONS, random.randint(0, 2))

            # 75% available, the rest split between on-trip and off-duty
            roll = random.random()
            availability = "Available" if roll < 0.75 else ("On-trip" if roll < 0.9 else "Off-duty")

            # ~1 in 10 drivers without a rating yet
            rating = "" if random.random() < 0.1 else round(random.uniform(2.5, 5.0), 1)

            # Most paperwork current; some expiring soon or already lapsed
            insurance_days = random.choice([365, 365, 365, 200, 20, -5])

            writer.writerow([
                driver_id,
                random.choice(LOCATIONS),
                "|".join(trailers),
                "|".join(certs),
                rating,
                availability,
                f"CDL{random.randint(100000, 999999)}",
                _iso(random.randint(200, 1500)),
                _iso(random.randint(90, 700)),
                _iso(insurance_days),
                f"MVR{random.randint(10000, 99999)}",
                _iso(-random.randint(10, 300)),
                _iso(-random.randint(100, 900)),
                _iso(-random.randint(10, 300)),
            ])

    print(f"Successfully generated {count} mock drivers into '{filename}'.")

if __name__ == "__main__":
    generate_mock_drivers()
