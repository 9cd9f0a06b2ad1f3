"""
Constants and lookup data for the Environmental Quality API.
"""

# US EPA AQI categories, evaluated in order against the raw us_aqi value.
# A row matches when value <= max_value; the last row is unbounded.
AQI_CATEGORIES = [
    {
        'max_value': 50,
        'category': 'Good',
        'color_key': 'green',
        'health_message': 'Air quality is satisfactory. Enjoy outdoor activities!',
    },
    {
        'max_value': 100,
        'category': 'Moderate',
        'color_key': 'yellow',
        'health_message': 'Air quality is acceptable. Sensitive groups may experience minor issues.',
    },
    {
        'max_value': 150,
        'category': 'Unhealthy for Sensitive Groups',
        'color_key': 'orange',
        'health_message': 'Sensitive groups should limit prolonged outdoor activities.',
    },
    {
        'max_value': 200,
        'category': 'Unhealthy',
        'color_key': 'red',
        'health_message': 'Everyone should limit prolonged outdoor activities.',
    },
    {
        'max_value': 300,
        'category': 'Very Unhealthy',
        'color_key': 'purple',
        'health_message': 'Avoid outdoor activities. Stay indoors and keep windows closed.',
    },
    {
        'max_value': None,
        'category': 'Hazardous',
        'color_key': 'maroon',
        'health_message': 'Health alert: Avoid all outdoor activities. Stay indoors.',
    },
]

# Synthetic WQI categories (higher is worse).
WQI_CATEGORIES = [
    {
        'max_value': 25,
        'category': 'Excellent',
        'color_key': 'green',
        'health_message': 'Water quality is excellent. Safe for all activities including swimming and drinking.',
    },
    {
        'max_value': 50,
        'category': 'Good',
        'color_key': 'emerald',
        'health_message': 'Water quality is good. Generally safe for most activities.',
    },
    {
        'max_value': 75,
        'category': 'Fair',
        'color_key': 'yellow',
        'health_message': 'Water quality is fair. Caution advised for sensitive groups and prolonged exposure.',
    },
    {
        'max_value': 90,
        'category': 'Poor',
        'color_key': 'orange',
        'health_message': 'Water quality is poor. Avoid swimming and limit water contact.',
    },
    {
        'max_value': None,
        'category': 'Very Poor',
        'color_key': 'red',
        'health_message': 'Water quality is very poor. Avoid all water contact. Do not drink or swim.',
    },
]

# Pollutant names and properties, keyed by reading field
POLLUTANTS = {
    'pm25': {
        'name': 'PM2.5',
        'unit': 'µg/m³',
        'source_field': 'pm2_5',
    },
    'pm10': {
        'name': 'PM10',
        'unit': 'µg/m³',
        'source_field': 'pm10',
    },
    'o3': {
        'name': 'O₃',
        'unit': 'ppb',
        'source_field': 'ozone',
    },
    'no2': {
        'name': 'NO₂',
        'unit': 'ppb',
        'source_field': 'nitrogen_dioxide',
    },
    'so2': {
        'name': 'SO₂',
        'unit': 'ppb',
        'source_field': 'sulphur_dioxide',
    },
    'co': {
        'name': 'CO',
        'unit': 'ppm',
        'source_field': 'carbon_monoxide',
    },
}

DEFAULT_US_AQI = 50

# Weather proxies requested from the forecast API, with the value used when absent
WEATHER_DEFAULTS = {
    'temperature_2m': 20.0,
    'relative_humidity_2m': 50.0,
    'precipitation': 0.0,
}

# Reading used whenever the weather lookup fails
FALLBACK_WATER_READING = {
    'wqi': 65,
    'ph': 7.2,
    'dissolved_oxygen': 8.5,
    'turbidity': 4.2,
    'temperature': 20.0,
    'conductivity': 750.0,
    'category': 'Fair',
    'color_key': 'yellow',
}

# Water parameters reported with each WQI reading
WATER_PARAMETERS = {
    'ph': {'name': 'pH Level', 'unit': ''},
    'dissolved_oxygen': {'name': 'Dissolved Oxygen', 'unit': 'mg/L'},
    'turbidity': {'name': 'Turbidity', 'unit': 'NTU'},
    'temperature': {'name': 'Temperature', 'unit': '°C'},
    'conductivity': {'name': 'Conductivity', 'unit': 'µS/cm'},
}

# Messages shown to the user when the air lookup fails
NO_DATA_MESSAGE = 'Unable to fetch AQI data for this location. Please try another location.'
PROVIDER_ERROR_MESSAGE = 'Error fetching AQI data. Please try again.'
