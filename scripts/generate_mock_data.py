import pandas as pd
import numpy as np
import uuid
from datetime import date, timedelta

def generate_mock_loads(num_loads=200, output_file="raw_loads_generated.csv"):
    """
    Generates a dataset of posted loads to exercise the matching engine.
    Origins are drawn from a handful of freight hubs so many loads compete for
    the same nearby drivers, and equipment requirements are spread across the
    explicit `trailer_type` field and the legacy qualification list.
    """
    hubs = ["Miami, FL", "Atlanta, GA", "Dallas, TX", "Chicago, IL", "Nashville, TN",
            "Phoenix, AZ", "Boise, ID", "Omaha, NE"]
    destinations = ["Tampa, FL", "Houston, TX", "Memphis, TN", "Denver, CO", "Charlotte, NC"]
    trailers = ["dry-van", "refrigerated", "flatbed", "drop deck", "tanker", "hopper", "lowboy", ""]
    extra_requirements = ["", "hazmat", "twic", "tanker endorsement"]

    data = []
    today = date.today()

    for load_index in range(num_loads):
        trailer = np.random.choice(trailers)
        requirement = np.random.choice(extra_requirements)

        # 1 in 4 loads still uses the legacy list for its trailer requirement
        legacy = trailer and np.random.random() < 0.25
        qualifications = [q for q in ([trailer] if legacy else []) + [requirement] if q]

        data.append({
            "load_id": f"L_{str(uuid.uuid4())[:8]}",
            "origin": np.random.choice(hubs),
            "destination": np.random.choice(destinations),
            "cargo": np.random.choice(["produce", "steel coils", "furniture", "grain", "fuel"]),
            "weight": int(np.random.randint(5_000, 45_000)),
            "price": np.round(np.random.uniform(800.0, 6500.0), 2),
            "status": np.random.choice(["Pending", "Matched", "In-transit"], p=[0.7, 0.2, 0.1]),
            "trailer_type": "" if legacy else trailer,
            "required_qualifications": "|".join(qualifications),
            "pickup_date": (today + timedelta(days=int(np.random.randint(0, 14)))).isoformat(),
        })

    df = pd.DataFrame(data)
    df.to_csv(output_file, index=False)
    print(f"✅ Generated {num_loads} loads and saved to '{output_file}'")

    print("\nTop 5 Origins (driver competition):")
    counts = df['origin'].value_counts().head(5)
    for name, count in counts.items():
        print(f"  {name}: {count} loads")

if __name__ == "__main__":
    generate_mock_loads(num_loads=200)
