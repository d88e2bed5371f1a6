from __future__ import annotations
import heapq
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from bitstream import ALPH_SIZE, BITS_PER_WORD, PSEUDO_EOF, FormatError

SYM_BITS = BITS_PER_WORD + 1   # 0..256 fits in 9 bits

# Depth of any tree over <= ALPH_SIZE + 1 leaves is at most ALPH_SIZE, so the
# recursive walks below stay far from the interpreter recursion limit.
MAX_DEPTH = ALPH_SIZE

Code = Tuple[int, int]  # (bits, length)


@dataclass(frozen=True, eq=False)
class Node:
    freq: int
    sym: Optional[int] = None
    left: Optional["Node"] = None
    right: Optional["Node"] = None

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None


def build_tree(counts) -> Node:
    """
    counts: 256 non-negative counters indexed by byte value.
    One leaf per non-zero count plus the PSEUDO_EOF leaf (weight 1).

    Ties: heap entries are (weight, creation order). Leaves are created in
    ascending symbol order with PSEUDO_EOF last, merged nodes after them, so
    among equal weights the node created first is popped first and becomes
    the left child.
    """
    pq = []
    order = 0
    for s in range(ALPH_SIZE):
        f = int(counts[s])
        if f > 0:
            pq.append((f, order, Node(freq=f, sym=s)))
            order += 1
    pq.append((1, order, Node(freq=1, sym=PSEUDO_EOF)))
    order += 1
    heapq.heapify(pq)

    while len(pq) > 1:
        fa, _, a = heapq.heappop(pq)
        fb, _, b = heapq.heappop(pq)
        heapq.heappush(pq, (fa + fb, order, Node(freq=fa + fb, left=a, right=b)))
        order += 1
    return pq[0][2]


def build_codebook(node: Node, prefix: int = 0, length: int = 0,
                   code: Optional[Dict[int, Code]] = None) -> Dict[int, Code]:
    """
    Return mapping: sym -> (code_int, code_len), 0 on left edges, 1 on right.
    A lone PSEUDO_EOF root gets a zero-length code.
    """
    if code is None:
        code = {}
    if node.is_leaf:
        code[node.sym] = (prefix, length)
    else:
        build_codebook(node.left, prefix << 1, length + 1, code)
        build_codebook(node.right, (prefix << 1) | 1, length + 1, code)
    return code


def write_tree(node: Node, bw):
    if node.is_leaf:
        bw.write_bits(1, 1)
        bw.write_bits(SYM_BITS, node.sym)
        return
    bw.write_bits(1, 0)
    write_tree(node.left, bw)
    write_tree(node.right, bw)


def read_tree(br, depth: int = 0) -> Node:
    try:
        bit = br.read_bits(1)
        if bit == 1:
            sym = br.read_bits(SYM_BITS)
    except EOFError as e:
        raise FormatError("Malformed stream: tree header truncated") from e

    if bit == 1:
        if sym > PSEUDO_EOF:
            raise FormatError(f"Malformed stream: leaf symbol {sym} out of range")
        return Node(freq=0, sym=sym)
    if depth >= MAX_DEPTH:
        raise FormatError("Malformed stream: tree header too deep")
    left = read_tree(br, depth + 1)
    right = read_tree(br, depth + 1)
    return Node(freq=0, left=left, right=right)
