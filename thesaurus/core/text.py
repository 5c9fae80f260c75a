from __future__ import annotations


def substr_replace(text: str, replacement: str, start: int, length: int | None = None) -> str:
    """Replace `length` characters of `text` starting at `start` with `replacement`.

    Offsets coming from the analyzer are codepoint counts, which is what str
    indexing uses. Out-of-range values follow array splice conventions:
     - negative `start` counts from the end (clamped to 0), `start` past the end appends;
     - `length=None` removes to the end, negative `length` stops that many
       characters before the end, `length` past the end removes to the end.
    """
    size = len(text)
    if start < 0:
        start = max(0, size + start)
    start = min(start, size)
    if length is None:
        end = size
    elif length < 0:
        end = max(start, size + length)
    else:
        end = min(size, start + length)
    return text[:start] + replacement + text[end:]
