"""
Example 1: Writing and querying points

This example demonstrates:
- Writing records that do not all share the same attributes
- Reading query results as a mapping of series name to records
- Reading query results one series at a time with a visitor
"""
from dotenv import load_dotenv

import fluxseries as fs

load_dotenv()


def main():
    # Connection settings come from FLUXSERIES_* variables (defaults: localhost:8086, root/root)
    client = fs.Client("example")

    print("=" * 60)
    print("Example 1: Writing and querying points")
    print("=" * 60)

    print("\n1. Creating database...")
    client.create_database("example")
    print("   ✓ Database created")

    print("\n2. Writing points...")
    client.write_point("response_times", [
        {"endpoint": "/login", "ms": 120, "status": 200},
        {"endpoint": "/search", "ms": 340},
        {"endpoint": "/login", "ms": 95, "status": 401, "region": "eu"},
    ])
    print("   ✓ 3 points written (missing attributes are sent as null)")

    print("\n3. Querying as a mapping...")
    series = client.query("select * from response_times")
    for name, records in series.items():
        print(f"   {name}: {len(records)} record(s)")
        for record in records:
            print(f"     {record}")

    print("\n4. Querying with a visitor...")
    client.query(
        "select * from response_times",
        visit=lambda name, records: print(f"   visited {name} with {len(records)} record(s)"),
    )

    client.delete_database("example")
    client.close()


if __name__ == "__main__":
    main()
