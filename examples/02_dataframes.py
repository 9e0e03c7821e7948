"""
Example 2: DataFrames

This example demonstrates:
- Writing a pandas DataFrame with a DatetimeIndex as points
- Reading query results back as one DataFrame per series
"""
import numpy as np
import pandas as pd
from dotenv import load_dotenv

import fluxseries as fs

load_dotenv()


def main():
    client = fs.Client("example")
    client.create_database("example")

    index = pd.date_range("2025-01-01", periods=6, freq="h", tz="UTC")
    df = pd.DataFrame({
        "wind_speed": [5.2, 6.1, np.nan, 7.4, 7.9, 6.8],
        "direction": ["N", "N", "NE", "NE", None, "E"],
    }, index=index)

    print("Writing DataFrame:")
    print(df)
    client.write_dataframe("wind", df, time_precision="s")

    frames = client.query_dataframes("select * from wind", time_precision="s")
    for name, frame in frames.items():
        print(f"\n{name}:")
        print(frame)

    client.delete_database("example")
    client.close()


if __name__ == "__main__":
    main()
