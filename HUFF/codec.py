import io

import numpy as np

from bitpack import BitReader, BitWriter
from bitstream import (ALPH_SIZE, BITS_PER_WORD, PSEUDO_EOF, FormatError, Header,
                       TruncatedBodyError, check_header, read_header, write_header)
from huffman import build_codebook, build_tree, read_tree, write_tree


def read_counts(br: BitReader) -> np.ndarray:
    """Pass 1: int64 counter per byte value, read until end of stream."""
    counts = np.zeros(ALPH_SIZE, dtype=np.int64)
    while True:
        try:
            sym = br.read_bits(BITS_PER_WORD)
        except EOFError:
            break
        counts[sym] += 1
    return counts


def write_body(br: BitReader, codes, bw: BitWriter):
    """Pass 2: one code per input byte, then the PSEUDO_EOF code exactly once."""
    while True:
        try:
            sym = br.read_bits(BITS_PER_WORD)
        except EOFError:
            break
        bw.write_code(*codes[sym])
    bw.write_code(*codes[PSEUDO_EOF])


def read_body(br: BitReader, root, bw: BitWriter):
    """
    Walk the tree one bit at a time (0=left, 1=right), emitting a byte per leaf
    until the PSEUDO_EOF leaf. A lone PSEUDO_EOF root ends without reading.
    """
    node = root
    while not (node.is_leaf and node.sym == PSEUDO_EOF):
        if node.is_leaf:
            bw.write_bits(BITS_PER_WORD, node.sym)
            node = root
            continue
        try:
            bit = br.read_bits(1)
        except EOFError as e:
            raise TruncatedBodyError("Malformed stream: no end-of-stream code") from e
        node = node.right if bit else node.left


def compress(br: BitReader, bw: BitWriter, header: Header = Header.TREE):
    """
    Two passes over `br`: count, build tree, write marker + tree, rewind,
    encode. `br` must be rewindable (seekable input).
    Returns the frequency table and code table for reporting.
    """
    check_header(header)
    if not br.can_reset():
        raise io.UnsupportedOperation("compress needs a rewindable (seekable) input")
    counts = read_counts(br)
    root = build_tree(counts)
    codes = build_codebook(root)
    write_header(bw, header)
    write_tree(root, bw)
    br.reset()
    write_body(br, codes, bw)
    return counts, codes


def decompress(br: BitReader, bw: BitWriter):
    """
    Raises FormatError for a bad marker or header and TruncatedBodyError when
    the body ends early. Bytes decoded before the failure have already been
    written to `bw`.
    """
    read_header(br)
    root = read_tree(br)
    if root.is_leaf and root.sym != PSEUDO_EOF:
        raise FormatError("Malformed stream: single-leaf tree without end-of-stream symbol")
    read_body(br, root, bw)


def compress_file(in_path, out_path, header: Header = Header.TREE):
    check_header(header)
    with BitReader(in_path) as br, BitWriter(out_path) as bw:
        return compress(br, bw, header=header)


def decompress_file(in_path, out_path):
    with BitReader(in_path) as br, BitWriter(out_path) as bw:
        decompress(br, bw)


def compress_bytes(data: bytes, header: Header = Header.TREE) -> bytes:
    out = io.BytesIO()
    with BitReader(io.BytesIO(data)) as br, BitWriter(out) as bw:
        compress(br, bw, header=header)
    return out.getvalue()


def decompress_bytes(data: bytes) -> bytes:
    out = io.BytesIO()
    with BitReader(io.BytesIO(data)) as br, BitWriter(out) as bw:
        decompress(br, bw)
    return out.getvalue()
