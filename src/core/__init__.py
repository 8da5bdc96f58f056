"""Domain model: sensors, threshold kinds and bus message entities."""
