import bisect
from math import log2

from bitseq import BitSequence


# Errors

class HuffmanError(Exception):
    pass

class InsufficientNodes(HuffmanError): # tree construction ran out of nodes to merge
    pass

class SymbolNotFound(HuffmanError, KeyError): # encoding met a symbol the table never saw
    def __init__(self, symbol):
        super().__init__(symbol)
        self.symbol = symbol

    def __str__(self):
        return f"symbol {self.symbol!r} not found in lookup table"

class MismatchedInputLengths(HuffmanError, ValueError): # parallel symbol/weight arrays differ in length
    pass


# Frequency counting

def freq_table(data) -> dict: # data: str, bytes or any iterable of hashable symbols
    ft = {}
    for symbol in data:
        ft[symbol] = ft.get(symbol, 0) + 1
    return ft

def probability_table(data) -> dict: # same as freq_table but weights sum to 1
    ft = freq_table(data)
    total = sum(ft.values())
    return {symbol: count / total for symbol, count in ft.items()}

def weights_from_arrays(symbols, weights) -> dict: # symbols[i] has weight weights[i]
    if len(symbols) != len(weights):
        raise MismatchedInputLengths(
            f"{len(symbols)} symbols but {len(weights)} weights"
        )
    table = {}
    for symbol, weight in zip(symbols, weights):
        if weight < 0:
            raise ValueError(f"negative weight {weight!r} for symbol {symbol!r}")
        table[symbol] = weight
    return table


# Tree construction

class HuffmanNode: # Node for Huffman tree
    def __init__(self, symbol=None, left=None, right=None):
        self.symbol = symbol # None for internal nodes
        self.left = left
        self.right = right

    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def __repr__(self):
        if self.is_leaf():
            return f"HuffmanNode({self.symbol!r})"
        return f"HuffmanNode(left={self.left!r}, right={self.right!r})"

def _merge_lowest(working): # working: list of (weight, node), ascending by weight
    if len(working) < 2:
        raise InsufficientNodes("attempt to build tree without two nodes to combine")

    left_weight, left = working.pop(0)
    right_weight, right = working.pop(0)
    weight = left_weight + right_weight
    merged = HuffmanNode(left=left, right=right)

    # equal weights: the merged node goes in front of the entries already there
    pos = bisect.bisect_left(working, weight, key=lambda entry: entry[0])
    working.insert(pos, (weight, merged))

def build_huffman_tree(frequency_table): # frequency_table: dict of symbol -> weight
    """
    Greedy Huffman merge over the positive-weight entries of frequency_table.

    Returns the root node. A single-symbol table gives a leaf root whose code
    is empty. Leaves of equal weight are taken in the table's iteration order.
    """
    leaves = [(weight, symbol) for symbol, weight in frequency_table.items() if weight > 0]
    if not leaves:
        raise InsufficientNodes("cannot build a tree from an empty frequency table")

    leaves.sort(key=lambda entry: entry[0]) # stable, so ties keep table order
    working = [(weight, HuffmanNode(symbol)) for weight, symbol in leaves]

    while len(working) > 1:
        _merge_lowest(working)

    return working[0][1] # root of the tree


# Code table generation

def generate_huffman_codes(root) -> dict: # root: root of the Huffman tree
    """
    Depth-first walk recording each leaf's path (left = 0, right = 1).

    Uses an explicit stack: a skewed weight table can make the tree as deep as
    the alphabet is large, past Python's recursion limit.
    """
    codes = {}
    stack = [(root, BitSequence())]
    while stack:
        node, current_code = stack.pop()
        if node.is_leaf():
            codes[node.symbol] = current_code
            continue

        right_code = current_code.copy()
        right_code.add(1)
        stack.append((node.right, right_code))

        left_code = current_code.copy()
        left_code.add(0)
        stack.append((node.left, left_code)) # popped first, so left subtrees come out first

    return codes # symbol -> BitSequence


# Encoding

def _lookup_code(code_table, symbol) -> BitSequence: # the table's own code, read-only
    try:
        return code_table[symbol]
    except KeyError:
        raise SymbolNotFound(symbol) from None

def encode_symbol(code_table, symbol) -> BitSequence: # a copy, so callers can't alter the table
    return _lookup_code(code_table, symbol).copy()

def huffman_encode(data, code_table) -> BitSequence: # code_table: dict or lookup.DenseLookupTable
    encoded = BitSequence()
    for symbol in data:
        encoded.append(_lookup_code(code_table, symbol))
    return encoded


# Code statistics

def code_lengths(code_table) -> dict:
    return {symbol: len(code) for symbol, code in code_table.items()}

def encoded_length(frequency_table, code_table) -> int: # bits needed without encoding anything
    total = 0
    for symbol, count in frequency_table.items():
        if count:
            total += count * len(_lookup_code(code_table, symbol))
    return total

def average_code_length(frequency_table, code_table) -> float:
    total = sum(frequency_table.values())
    if not total:
        return 0.0
    return encoded_length(frequency_table, code_table) / total

def entropy(frequency_table) -> float: # Shannon entropy in bits per symbol
    total = sum(frequency_table.values())
    h = 0.0
    for weight in frequency_table.values():
        if weight > 0:
            p = weight / total
            h -= p * log2(p)
    return h

def efficiency(frequency_table, code_table) -> float: # entropy / average code length, 1.0 is optimal
    avg = average_code_length(frequency_table, code_table)
    if avg == 0:
        return 1.0
    return entropy(frequency_table) / avg

def is_prefix_free(code_table) -> bool:
    codes = sorted(str(code) for code in dict(code_table.items()).values())
    # after sorting, a prefix always sits directly before some code it prefixes
    return all(not b.startswith(a) for a, b in zip(codes, codes[1:]))
