from typing import Dict, Optional

from bitseq import BitSequence

DENSE_LIMIT = 4096 # largest ordinal "auto" will still index densely


def symbol_ordinal(symbol): # index of a symbol in a dense table, or None if it has none
    if isinstance(symbol, str) and len(symbol) == 1:
        return ord(symbol)
    if isinstance(symbol, int) and not isinstance(symbol, bool) and symbol >= 0:
        return symbol
    return None


class DenseLookupTable: # codes stored in a list indexed by symbol ordinal
    def __init__(self, codes: Dict[object, BitSequence]):
        ordinals = {}
        for symbol in codes:
            index = symbol_ordinal(symbol)
            if index is None:
                raise ValueError(f"symbol {symbol!r} has no ordinal for a dense table")
            ordinals[symbol] = index
        if len(set(ordinals.values())) != len(ordinals):
            raise ValueError("symbols share an ordinal (e.g. 'A' and 65), use a hash table")

        size = max(ordinals.values()) + 1 if ordinals else 0
        self._slots = [None] * size # None marks a symbol that has no code
        self._symbols = [None] * size
        for symbol, index in ordinals.items():
            self._slots[index] = codes[symbol]
            self._symbols[index] = symbol

    def __getitem__(self, symbol) -> BitSequence:
        index = symbol_ordinal(symbol)
        if index is None or index >= len(self._slots):
            raise KeyError(symbol)
        code = self._slots[index]
        # str 'A' and int 65 share a slot, so the stored symbol has to match too
        if code is None or self._symbols[index] != symbol:
            raise KeyError(symbol)
        return code

    def get(self, symbol, default=None):
        try:
            return self[symbol]
        except KeyError:
            return default

    def __contains__(self, symbol) -> bool:
        return self.get(symbol) is not None

    def __len__(self) -> int:
        return sum(1 for code in self._slots if code is not None)

    def __iter__(self):
        return (s for s, code in zip(self._symbols, self._slots) if code is not None)

    def items(self):
        return [(s, code) for s, code in zip(self._symbols, self._slots) if code is not None]


def build_lookup_table(codes: Dict[object, BitSequence], dense: Optional[bool] = None):
    """
    Freeze a symbol -> code map into the table used for encoding.

    dense=True  -> DenseLookupTable (every symbol needs an ordinal)
    dense=False -> plain dict (hash lookup)
    dense=None  -> dense when every symbol has its own ordinal no larger than DENSE_LIMIT
    """
    if dense is None:
        ordinals = [symbol_ordinal(s) for s in codes]
        dense = (
            bool(ordinals)
            and all(o is not None and o <= DENSE_LIMIT for o in ordinals)
            and len(set(ordinals)) == len(ordinals)
        )

    if dense:
        return DenseLookupTable(codes)
    return dict(codes)
