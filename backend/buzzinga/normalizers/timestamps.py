def isoformat(value):
    return value.isoformat() if value is not None else None
