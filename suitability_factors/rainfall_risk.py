HIGH = "High"
MODERATE = "Moderate"
LOW = "Low"


def classify_risk(rainfall_mm, max_temp_c):
    """Crop-loss risk label from next-day rainfall and max temperature."""
    rain = rainfall_mm or 0
    temp = max_temp_c or 0
    if rain > 100 or temp > 40:
        return HIGH
    if rain > 50 or temp > 35:
        return MODERATE
    return LOW
