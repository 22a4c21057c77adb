import pandas as pd
import numpy as np

# Number of crates
num_crates = 40

np.random.seed(42)

# Realistic crate dimensions
lengths = np.random.randint(40, 160, num_crates)   # cm
widths  = np.random.randint(40, 120, num_crates)   # cm
heights = np.random.randint(30, 120, num_crates)   # cm

# Estimate volume and derive weight based on density
volumes = lengths * widths * heights / 1e6          # m³
density = np.random.uniform(80, 250, num_crates)    # kg/m³ typical for packed crates
weights = np.round(volumes * density, 1)
weights = np.clip(weights, 5, 400)

# Every fifth crate rests on the crate before it
stack_on = ["" if i % 5 != 4 else i for i in range(num_crates)]

df = pd.DataFrame({
    "id": range(1, num_crates + 1),
    "Label": [f"Crate {i+1:02d}" for i in range(num_crates)],
    "Length": lengths,
    "Width": widths,
    "Height": heights,
    "Weight": weights,
    "Unit": "cm",
    "stack_on": stack_on,
})

df.to_csv("sample_crates.csv", index=False)

print("File created: sample_crates.csv")
print(df.head(10))
