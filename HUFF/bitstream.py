from enum import Enum

BITS_PER_WORD = 8
BITS_PER_INT = 32
ALPH_SIZE = 1 << BITS_PER_WORD   # 256 byte symbols
PSEUDO_EOF = ALPH_SIZE           # sentinel symbol, needs BITS_PER_WORD + 1 bits

HUFF_NUMBER = 0xFACE8200
HUFF_TREE = HUFF_NUMBER | 1
HUFF_COUNTS = HUFF_NUMBER | 2    # reserved, never written or accepted

# Stream layout (big-endian, MSB-first bits):
# marker(u32) tree(preorder: 0=internal, 1=leaf + sym(u9)) body(codes..., EOF code) pad(0..7)


class Header(Enum):
    TREE = "tree"
    COUNTS = "counts"


class FormatError(ValueError):
    """Compressed stream has a bad marker or a malformed tree header."""


class TruncatedBodyError(ValueError):
    """Compressed body ended before the end-of-stream symbol."""


def check_header(header: Header):
    if header is Header.COUNTS:
        raise NotImplementedError("counts header is not supported, use Header.TREE")
    if header is not Header.TREE:
        raise ValueError(f"Unknown header variant: {header!r}")


def write_header(bw, header: Header = Header.TREE):
    check_header(header)
    bw.write_bits(BITS_PER_INT, HUFF_TREE)


def read_header(br) -> Header:
    try:
        magic = br.read_bits(BITS_PER_INT)
    except EOFError as e:
        raise FormatError("Malformed stream: marker too short") from e
    if magic == HUFF_COUNTS:
        raise FormatError("Unsupported stream: counts header")
    if magic != HUFF_TREE:
        raise FormatError(f"Bad magic 0x{magic:08X} (not a Huffman tree stream)")
    return Header.TREE
