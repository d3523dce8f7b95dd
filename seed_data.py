#!/usr/bin/env python3

import sys
import os
from decimal import Decimal

# Add project root to path
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from sqlalchemy.orm import Session
from src.database import SessionLocal, init_db
from src.models import Station, Train, RouteStop, Ticket

STATIONS = [
    ("Mumbai Central", "MMCT", "Mumbai"),
    ("Delhi Junction", "DLI", "Delhi"),
    ("Chennai Central", "MAS", "Chennai"),
    ("Kolkata Howrah", "HWH", "Kolkata"),
    ("Bangalore City", "SBC", "Bangalore"),
    ("Hyderabad Deccan", "HYB", "Hyderabad"),
    ("Ahmedabad Junction", "ADI", "Ahmedabad"),
    ("Pune Junction", "PUNE", "Pune"),
]

# name, number, start time, speed km/h, price per km, seats, [(station code, distance to next)]
TRAINS = [
    ("Express 101", "12951", "08:00", Decimal("100"), Decimal("2.5"), 50,
     [("MMCT", 500), ("DLI", 0)]),
    ("Rajdhani Express", "12301", "16:55", Decimal("120"), Decimal("4.0"), 40,
     [("DLI", 800), ("HWH", 0)]),
    ("Shatabdi Express", "12007", "06:00", Decimal("90"), Decimal("3.0"), 60,
     [("MAS", 350), ("SBC", 0)]),
    ("Deccan Queen", "12123", "23:30", Decimal("60"), Decimal("1.5"), 80,
     [("PUNE", 190), ("MMCT", 490), ("ADI", 0)]),
    ("Southern Mail", "12711", "06:00", Decimal("60"), Decimal("2.0"), 70,
     [("MMCT", 150), ("PUNE", 200), ("HYB", 570), ("SBC", 0)]),
]

def create_seed_data(db: Session):
    """Replace stations, trains and routes with the sample network"""
    print("🚀 Creating seed data for the timetable service...")

    # Clear existing data (in reverse dependency order)
    print("Clearing existing data...")
    db.query(Ticket).delete()
    db.query(RouteStop).delete()
    db.query(Train).delete()
    db.query(Station).delete()

    # 1. Create Stations
    print("Creating stations...")
    stations = [Station(name=name, code=code, city=city) for name, code, city in STATIONS]
    db.add_all(stations)
    db.flush()
    by_code = {station.code: station for station in stations}

    # 2. Create Trains with their routes
    print("Creating trains and routes...")
    trains = []
    stop_count = 0
    for name, number, start_time, speed, price_per_km, seats, route in TRAINS:
        train = Train(
            name=name,
            number=number,
            start_time=start_time,
            speed_kmh=speed,
            price_per_km=price_per_km,
            available_seats=seats,
            is_active=True
        )
        train.route_stops = [
            RouteStop(station_id=by_code[code].id, sequence=sequence, distance_to_next=distance)
            for sequence, (code, distance) in enumerate(route)
        ]
        stop_count += len(route)
        trains.append(train)

    db.add_all(trains)
    db.commit()

    print("✅ Successfully created seed data!")
    print(f"Created:")
    print(f"  - {len(stations)} stations")
    print(f"  - {len(trains)} trains")
    print(f"  - {stop_count} route stops")
    return stations, trains

if __name__ == "__main__":
    init_db()
    session = SessionLocal()
    try:
        create_seed_data(session)
    except Exception as e:
        print(f"❌ Error creating seed data: {e}")
        session.rollback()
        raise
    finally:
        session.close()
