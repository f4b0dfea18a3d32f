"""
Decimal-point editing and validation of assembled readings.

Meters often print the fractional digit without a visible decimal
point, so the model reports "12345" for a display reading 1234.5.
These helpers place the decimal point and check that a reading is a
usable number. Neither is applied by the assembler itself.
"""

DEFAULT_MAX_READING_LENGTH = 20


def insert_decimal(reading: str) -> str:
    """Insert a decimal point before the last digit.

    "12345" becomes "1234.5". Readings shorter than two characters, or
    that already contain a decimal point, are returned unchanged.
    """
    if len(reading) < 2 or "." in reading:
        return reading
    return reading[:-1] + "." + reading[-1]


def is_valid_reading(reading: str, max_length: int = DEFAULT_MAX_READING_LENGTH) -> bool:
    """Check that a reading is a non-blank number of acceptable length."""
    if not reading or not reading.strip():
        return False
    if len(reading) > max_length:
        return False
    try:
        float(reading)
    except ValueError:
        return False
    return True
