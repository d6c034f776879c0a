"""Seed collections and volume dynamics for the offline simulator."""

# name -> (starting 24h volume in APE, floor price in APE)
SEED_COLLECTIONS: dict[str, tuple[float, float]] = {
    "Bored Ape Yacht Club": (4200.0, 12.5),
    "Mutant Ape Yacht Club": (3100.0, 2.4),
    "Bored Ape Kennel Club": (1500.0, 0.9),
    "Otherdeed for Otherside": (1350.0, 0.35),
    "ApeChain Punks": (980.0, 0.6),
    "Gs on Ape": (870.0, 0.2),
    "Kodas": (760.0, 1.8),
    "Sewer Pass": (640.0, 0.15),
    "Curtis Reborn": (520.0, 0.08),
    "Banana Bros": (410.0, 0.05),
}

# Generated filler collections to reach a full top-100 page
FILLER_COUNT = 110
FILLER_VOLUME_RANGE = (5.0, 400.0)
FILLER_FLOOR_RANGE = (0.01, 0.5)

# Annualised volatility of the 24h volume random walk. Volumes are far noisier
# than prices, so this is much higher than a stock's.
VOLUME_SIGMA = 1.5
VOLUME_MU = 0.0
