import io
import random

import pytest

from bitpack import BitReader, BitWriter
from bitstream import HUFF_COUNTS, HUFF_TREE, PSEUDO_EOF, FormatError, Header, TruncatedBodyError
from codec import (compress, compress_bytes, compress_file, decompress, decompress_bytes,
                   decompress_file, read_counts)
from huffman import SYM_BITS
from samples import KINDS, generate_sample


def _roundtrip(data):
	compressed = compress_bytes(data)
	assert decompress_bytes(compressed) == data
	return compressed


def test_roundtrip_empty():
	compressed = _roundtrip(b"")
	# marker + single leaf (1 + 9 bits), zero-length EOF code, padded to bytes
	assert compressed == HUFF_TREE.to_bytes(4, "big") + bytes([0x80 | (PSEUDO_EOF >> 2), (PSEUDO_EOF & 0x3) << 6])


def test_empty_input_header_is_single_sentinel_leaf():
	br = BitReader(io.BytesIO(compress_bytes(b"")))
	assert br.read_bits(32) == HUFF_TREE
	assert br.read_bits(1) == 1
	assert br.read_bits(SYM_BITS) == PSEUDO_EOF


def test_roundtrip_all_bytes_once():
	_roundtrip(bytes(range(256)))


def test_roundtrip_single_byte():
	for b in (0, 0x41, 255):
		_roundtrip(bytes([b]))


def test_roundtrip_random_10kb():
	rnd = random.Random(1234)
	_roundtrip(bytes(rnd.getrandbits(8) for _ in range(10 * 1024)))


@pytest.mark.parametrize("kind", KINDS)
def test_roundtrip_samples(kind):
	_roundtrip(generate_sample(kind, size=5000, seed=3))


def test_three_a_one_b_scenario():
	data = bytes([0x41, 0x41, 0x41, 0x42])
	out = io.BytesIO()
	with BitReader(io.BytesIO(data)) as br, BitWriter(out) as bw:
		compress(br, bw)
		header_bits = 32 + 2 + 3 * (1 + SYM_BITS)
		body_bits = bw.bits_written() - header_bits
	# A=1, B=00, EOF=01
	assert body_bits == 3 * 1 + 2 + 2
	assert body_bits < 4 * 8
	assert decompress_bytes(out.getvalue()) == data


def test_compress_returns_counts_and_codes():
	counts, codes = compress(BitReader(io.BytesIO(b"AAAB")), BitWriter(io.BytesIO()))
	assert counts[0x41] == 3 and counts[0x42] == 1 and counts.sum() == 4
	assert codes[0x41] == (1, 1)


def test_read_counts():
	counts = read_counts(BitReader(io.BytesIO(b"\x00\x00\xff")))
	assert counts.shape == (256,)
	assert counts[0] == 2 and counts[255] == 1


def test_output_is_deterministic():
	data = generate_sample("text", size=2000)
	assert compress_bytes(data) == compress_bytes(data)


@pytest.mark.parametrize("marker", [b"\x00\x00\x00\x00", b"\xfa\xce\x82\x00", b"\xff\xff\xff\xff"])
def test_bad_marker_rejected(marker):
	compressed = compress_bytes(b"Hello World" * 50)
	with pytest.raises(FormatError):
		decompress_bytes(marker + compressed[4:])


def test_counts_marker_rejected():
	compressed = compress_bytes(b"Hello World")
	with pytest.raises(FormatError):
		decompress_bytes(HUFF_COUNTS.to_bytes(4, "big") + compressed[4:])


@pytest.mark.parametrize("data", [b"", b"\xfa", b"\xfa\xce\x82"])
def test_short_marker_rejected(data):
	with pytest.raises(FormatError):
		decompress_bytes(data)


def test_garbage_after_marker_rejected():
	with pytest.raises(FormatError):
		decompress_bytes(HUFF_TREE.to_bytes(4, "big") + b"\x00" * 64)


def test_single_leaf_without_sentinel_rejected():
	out = io.BytesIO()
	with BitWriter(out) as bw:
		bw.write_bits(32, HUFF_TREE)
		bw.write_bits(1, 1)
		bw.write_bits(SYM_BITS, 0x41)
	with pytest.raises(FormatError):
		decompress_bytes(out.getvalue())


def test_format_errors_are_value_errors():
	assert issubclass(FormatError, ValueError)
	assert issubclass(TruncatedBodyError, ValueError)


def test_truncated_body():
	data = b"This is a test" * 100
	compressed = compress_bytes(data)
	with pytest.raises(TruncatedBodyError):
		decompress_bytes(compressed[:-3])


def test_every_prefix_cut_in_body_is_truncated():
	data = b"abcabcabd"
	compressed = compress_bytes(data)
	# header: 32 + tree bits; cut anywhere after the header bytes
	header_bytes = (32 + 4 + 5 * (1 + SYM_BITS) + 7) // 8
	for cut in range(header_bytes, len(compressed) - 1):
		with pytest.raises(TruncatedBodyError):
			decompress_bytes(compressed[:cut])


def test_partial_output_before_truncation():
	data = b"x" * 50 + b"y" * 50
	compressed = compress_bytes(data)
	out = io.BytesIO()
	with pytest.raises(TruncatedBodyError):
		with BitReader(io.BytesIO(compressed[:-2])) as br, BitWriter(out) as bw:
			decompress(br, bw)
	assert data.startswith(out.getvalue())


def test_counts_header_not_implemented(tmp_path):
	with pytest.raises(NotImplementedError):
		compress_bytes(b"abc", header=Header.COUNTS)
	dst = tmp_path / "out.hf"
	with pytest.raises(NotImplementedError):
		compress_file(tmp_path / "missing", dst, header=Header.COUNTS)
	assert not dst.exists()


def test_file_roundtrip(tmp_path):
	src = tmp_path / "in.bin"
	mid = tmp_path / "in.hf"
	dst = tmp_path / "out.bin"
	src.write_bytes(generate_sample("skewed", size=20000, seed=7))
	compress_file(src, mid)
	decompress_file(mid, dst)
	assert dst.read_bytes() == src.read_bytes()
	assert mid.stat().st_size < src.stat().st_size


class Trickle(io.RawIOBase):
	"""Unbuffered, non-seekable source handing out at most `step` bytes per read."""

	def __init__(self, data, step):
		self.data = data
		self.step = step
		self.pos = 0

	def readable(self):
		return True

	def readinto(self, b):
		n = min(self.step, len(b), len(self.data) - self.pos)
		b[:n] = self.data[self.pos:self.pos + n]
		self.pos += n
		return n


@pytest.mark.parametrize("step", [1, 3, 7])
def test_decompress_from_short_read_source(step):
	data = b"hello world"
	out = io.BytesIO()
	with BitReader(Trickle(compress_bytes(data), step)) as br, BitWriter(out) as bw:
		decompress(br, bw)
	assert out.getvalue() == data


def test_compress_rejects_non_rewindable_input_before_writing():
	out = io.BytesIO()
	src = Trickle(b"abcabc", 2)
	with pytest.raises(io.UnsupportedOperation):
		with BitReader(src) as br, BitWriter(out) as bw:
			compress(br, bw)
	assert out.getvalue() == b""
	assert src.pos == 0
