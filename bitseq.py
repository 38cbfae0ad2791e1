from typing import Iterable, Iterator, List


class BitSequence: # ordered, append-only collection of bits
    __slots__ = ("_bits",)

    def __init__(self, bits: Iterable[int] = ()):
        self._bits: List[int] = []
        self.extend(bits)

    @classmethod
    def from_string(cls, text: str) -> "BitSequence":
        """
        Build a sequence from a string of '0' and '1' characters
        """
        seq = cls()
        for ch in text:
            if ch not in "01":
                raise ValueError(f"not a bit character: {ch!r}")
            seq._bits.append(1 if ch == "1" else 0)
        return seq

    def add(self, bit) -> None: # bit: truthy -> 1, falsy -> 0
        self._bits.append(1 if bit else 0)

    def append(self, other: "BitSequence") -> None: # other's bits go after ours, in order
        self._bits.extend(other._bits)

    def extend(self, bits: Iterable[int]) -> None:
        for bit in bits:
            self.add(bit)

    def copy(self) -> "BitSequence":
        seq = BitSequence()
        seq._bits = self._bits[:]
        return seq

    def __len__(self) -> int:
        return len(self._bits)

    def __iter__(self) -> Iterator[int]:
        return iter(self._bits)

    def __getitem__(self, index: int) -> int:
        return self._bits[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, BitSequence):
            return NotImplemented
        return self._bits == other._bits

    def __str__(self) -> str:
        return "".join("1" if bit else "0" for bit in self._bits)

    def __repr__(self) -> str:
        return f"BitSequence('{self}')"

    def startswith(self, prefix: "BitSequence") -> bool:
        n = len(prefix)
        return n <= len(self._bits) and self._bits[:n] == prefix._bits
