"""
Global configuration and constants for the Urban CO2 Capture Twin.
"""

# --- Grid / City Configuration ---
GRID_SIZE = 25                 # Cells per side of the square city grid
BASE_EMISSION_RATE = 100.0     # Reference emission rate (CO2 units per cell)
TRAFFIC_SEED = 7               # Seed for the traffic emission rate jitter

# --- Propagation ---
DISPERSION_FACTOR = 0.85       # Fraction of concentration a neighbor inherits
WIND_STRENGTH = 0.5            # Wind bias on dispersion (0 = none, 1 = full)
PROPAGATION_CUTOFF = 1.0       # Values at or below this are negligible and never spread

# --- Emission Source Categories ---
SOURCE_CATEGORIES = ("factory", "commercial", "traffic")
LANDMARK_CATEGORIES = ("factory", "commercial")  # Occupy their cell; devices cannot go there

# --- Capture Units ---
# capture_rate: reduction at the device cell (CO2 units)
# radius: reach in cells (Euclidean, linear falloff to zero at the edge)
# cost: installation cost (USD)
CAPTURE_UNITS = {
    "scrubber": {
        "name": "Roadside Scrubber",
        "capture_rate": 45.0,
        "radius": 2,
        "cost": 50000.0,
        "color": "#0891b2",
    },
    "garden": {
        "name": "Vertical Garden",
        "capture_rate": 25.0,
        "radius": 3,
        "cost": 25000.0,
        "color": "#16a34a",
    },
    "biofilter": {
        "name": "Industrial Biofilter",
        "capture_rate": 90.0,
        "radius": 4,
        "cost": 120000.0,
        "color": "#4f46e5",
    },
}

# --- Visualization ---
DISPLAY_MIN_CONCENTRATION = 5.0                       # Cells at or below this are drawn transparent
DISPLAY_MAX_CONCENTRATION = BASE_EMISSION_RATE * 2.5  # Top of the color ramp
