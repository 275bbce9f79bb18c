from utils.constants import E7_SCALE

_BASE32 = "0123456789bcdefghjkmnpqrstuvwxyz"
_BITS = [16, 8, 4, 2, 1]


def e7_to_degrees(value: int) -> float:
    return value / E7_SCALE


def encode(lat: float, lon: float, precision: int) -> str:
    """
    Encode coordinates as a geohash of `precision` characters.

    Bits alternate longitude first; a value sitting exactly on an interval
    midpoint falls into the upper half.

    Examples:
        >>> encode(40.6892, -74.0445, 7)
        'dr5r7p4'
        >>> encode(42.6, -5.6, 5)
        'ezs42'
    """
    if not isinstance(precision, int) or precision < 1:
        raise ValueError(f"Geohash precision must be a positive int, got {precision}")
    if not -90.0 <= lat <= 90.0:
        raise ValueError(f"Latitude out of range: {lat}")
    if not -180.0 <= lon <= 180.0:
        raise ValueError(f"Longitude out of range: {lon}")

    lat_interval = [-90.0, 90.0]
    lon_interval = [-180.0, 180.0]
    ch = 0
    bit = 0
    even = True
    geohash = []

    while len(geohash) < precision:
        if even:
            mid = (lon_interval[0] + lon_interval[1]) / 2
            if lon >= mid:
                ch |= _BITS[bit]
                lon_interval[0] = mid
            else:
                lon_interval[1] = mid
        else:
            mid = (lat_interval[0] + lat_interval[1]) / 2
            if lat >= mid:
                ch |= _BITS[bit]
                lat_interval[0] = mid
            else:
                lat_interval[1] = mid
        even = not even
        if bit < 4:
            bit += 1
        else:
            geohash.append(_BASE32[ch])
            bit = 0
            ch = 0
    return "".join(geohash)


def encode_e7(latitude: int, longitude: int, precision: int) -> str:
    return encode(e7_to_degrees(latitude), e7_to_degrees(longitude), precision)
