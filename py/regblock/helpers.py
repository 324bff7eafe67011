from __future__ import annotations

def genmask(high: int, low: int):
    return ((1 << (high + 1)) - 1) & ~((1 << low) - 1)

def all_ones(data_size: int):
    return genmask(data_size * 8 - 1, 0)

def fits(value: int, data_size: int):
    return 0 <= value <= all_ones(data_size)

def parse_int(text: str) -> int:
    return int(text.strip(), 0)
