from typing import Dict, Iterator, Tuple


class FrequencyTable:
    """
    Remembers how often each byte occurs on each sampled line.
    table[ord('.')][11] is the number of '.' seen (unenclosed) on line 11.

    A missing line means zero occurrences. Iteration follows the order in
    which bytes were first recorded.
    """

    def __init__(self):
        self._table: Dict[int, Dict[int, int]] = {}

    def increment(self, char: int, line: int) -> "FrequencyTable":
        per_line = self._table.setdefault(char, {})
        per_line[line] = per_line.get(line, 0) + 1
        return self

    def count(self, char: int, line: int) -> int:
        return self._table.get(char, {}).get(line, 0)

    def lines_for(self, char: int) -> Dict[int, int]:
        return dict(self._table.get(char, {}))

    def items(self) -> Iterator[Tuple[int, Dict[int, int]]]:
        for char, per_line in self._table.items():
            yield char, per_line

    def __contains__(self, char: int) -> bool:
        return char in self._table

    def __getitem__(self, char: int) -> Dict[int, int]:
        return self._table[char]

    def __iter__(self) -> Iterator[int]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:
        readable = {chr(c): lines for c, lines in self._table.items()}
        return f"FrequencyTable({readable})"
