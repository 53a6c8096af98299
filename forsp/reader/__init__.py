from forsp.reader.parser import Reader, parse_int64

__all__ = ["Reader", "parse_int64"]
