import pandas as pd
import numpy as np

# Main freight hubs served by the demo fleet (lat, lng, state)
CITIES = {
    "São Paulo": (-23.5505, -46.6333, "SP"),
    "Rio de Janeiro": (-22.9068, -43.1729, "RJ"),
    "Salvador": (-12.9777, -38.5016, "BA"),
    "Feira de Santana": (-12.2664, -38.9663, "BA"),
    "Belo Horizonte": (-19.9167, -43.9345, "MG"),
    "Curitiba": (-25.4284, -49.2733, "PR"),
    "Brasília": (-15.7939, -47.8828, "DF"),
    "Recife": (-8.0476, -34.8770, "PE"),
}

FIRST_NAMES = ["João", "Carlos", "Marcos", "Paulo", "Ana", "Rita", "José", "Lucas", "Pedro", "Sandra"]
LAST_NAMES = ["Silva", "Souza", "Oliveira", "Santos", "Pereira", "Lima", "Costa", "Almeida"]


def generate_demo_drivers(num_drivers=10, output_file="sampledata/demo_drivers.csv"):
    """
    Drivers with plates, phones and odometers spread around their next
    service, so some of them trigger maintenance alerts.
    """
    rows = []
    for driver_index in range(num_drivers):
        name = f"{np.random.choice(FIRST_NAMES)} {np.random.choice(LAST_NAMES)} {driver_index + 1}"
        current = int(np.random.randint(20_000, 400_000))
        rows.append({
            "driver_id": f"DRV-{str(driver_index + 1).zfill(3)}",
            "name": name,
            "phone": f"55719{np.random.randint(10_000_000, 99_999_999)}",
            "vehicle_plate": f"{''.join(np.random.choice(list('ABCDEFGHJKLMNPRSTUVWXYZ'), 3))}{np.random.randint(1, 9)}A{np.random.randint(10, 99)}",
            "current_mileage": current,
            # between 300 km overdue and 3000 km ahead
            "next_maintenance_mileage": current + int(np.random.randint(-300, 3000)),
        })

    df = pd.DataFrame(rows)
    df.to_csv(output_file, index=False)
    print(f"✅ Generated {num_drivers} drivers and saved to '{output_file}'")
    return df


def generate_demo_shipments(drivers, num_shipments=20, output_file="sampledata/demo_shipments.csv"):
    """
    Shipments between random hubs with the truck placed somewhere along
    the straight line, plus a little noise so it is not exactly on it.
    """
    names = list(CITIES)
    statuses = ["PENDING", "IN_TRANSIT", "IN_TRANSIT", "IN_TRANSIT", "STOPPED", "DELAYED", "DELIVERED"]
    used_codes = set()
    rows = []

    for _ in range(num_shipments):
        origin, destination = np.random.choice(names, 2, replace=False)
        o_lat, o_lng, o_state = CITIES[origin]
        d_lat, d_lng, d_state = CITIES[destination]

        status = np.random.choice(statuses)
        fraction = {"PENDING": 0.0, "DELIVERED": 1.0}.get(status, np.random.uniform(0.05, 0.95))
        current_lat = o_lat + (d_lat - o_lat) * fraction + np.random.normal(0, 0.05)
        current_lng = o_lng + (d_lng - o_lng) * fraction + np.random.normal(0, 0.05)

        company = np.random.choice(["RODOVAR", "AXD"], p=[0.7, 0.3])
        code = f"{company}{np.random.randint(1000, 9999)}"
        while code in used_codes:
            code = f"{company}{np.random.randint(1000, 9999)}"
        used_codes.add(code)

        driver = drivers.sample(1).iloc[0]
        rows.append({
            "code": code,
            "company": company,
            "status": status,
            "origin": origin,
            "origin_state": o_state,
            "origin_lat": o_lat,
            "origin_lng": o_lng,
            "destination": destination,
            "destination_state": d_state,
            "destination_lat": d_lat,
            "destination_lng": d_lng,
            "current_lat": np.round(current_lat, 6),
            "current_lng": np.round(current_lng, 6),
            "driver_id": driver["driver_id"],
            "driver_name": driver["name"],
        })

    df = pd.DataFrame(rows)
    df.to_csv(output_file, index=False)
    print(f"✅ Generated {num_shipments} shipments and saved to '{output_file}'")

    print("\nShipments per status:")
    for name, count in df["status"].value_counts().items():
        print(f"  {name}: {count}")
    return df


if __name__ == "__main__":
    drivers_df = generate_demo_drivers(num_drivers=10)
    generate_demo_shipments(drivers_df, num_shipments=20)
