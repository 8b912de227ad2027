from typing import List


def normalize_newlines(s: str) -> str:
    return s.replace("\r\n", "\n").replace("\r", "\n")


def utf16_positions(text: str) -> List[int]:
    # Qt addresses text in UTF-16 code units; characters outside the BMP take two
    out = [0]
    pos = 0
    for ch in text:
        pos += 2 if ord(ch) > 0xFFFF else 1
        out.append(pos)
    return out
