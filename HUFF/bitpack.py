import io
import operator
import os

BYTE_SIZE = 8
INT_SIZE = 32
BIT_BUFFER_SIZE = 8   # bytes loaded into the shift register per refill (64 bits)
BUFFER_SIZE = 8192    # bytes pulled from / pushed to the file per block


class BitWidthError(ValueError):
    """Requested field width outside [1, 32]."""


def _check_width(n):
    if isinstance(n, bool):
        raise BitWidthError(f"bit width must be an integer, got {n!r}")
    try:
        n = operator.index(n)
    except TypeError:
        raise BitWidthError(f"bit width must be an integer, got {n!r}") from None
    if not (1 <= n <= INT_SIZE):
        raise BitWidthError(f"bit width must be in [1, {INT_SIZE}], got {n!r}")
    return n


def _open(path_or_file, mode):
    # A path is opened and owned; a file object is borrowed and left open.
    if isinstance(path_or_file, (str, os.PathLike)):
        return open(path_or_file, mode), True
    return path_or_file, False


class BitReader:
    """
    Reads 1..32 bit fields (MSB-first) from a byte stream.

    Bytes are pulled from the file in BUFFER_SIZE blocks and fed 8 at a time
    into a 64-bit shift register; `_available` counts the valid low-order bits
    still held there. End of stream is signalled by EOFError.
    """

    def __init__(self, path_or_file):
        self.f, self._owns_file = _open(path_or_file, "rb")
        self._start = self.f.tell() if self.f.seekable() else None
        self._bits_read = 0
        self._clear()

    def _clear(self):
        self._buf = b""
        self._pos = 0
        self._bit_buffer = 0
        self._available = 0

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, exc_traceback):
        self.close()

    def bits_read(self) -> int:
        """
        Cumulative number of bits requested so far.
        Counted before the end-of-stream check and kept across reset(), so it
        is a statistic, not a stream position.
        """
        return self._bits_read

    def can_reset(self) -> bool:
        return self._start is not None

    def reset(self):
        """Rewind to where the stream was positioned when the reader was built."""
        if not self.can_reset():
            raise io.UnsupportedOperation("input stream cannot be rewound")
        self.f.seek(self._start)
        self._clear()

    def close(self):
        if self._owns_file:
            self.f.close()

    def read(self) -> int:
        """Read one 8-bit word."""
        return self.read_bits(BYTE_SIZE)

    def read_bits(self, n: int) -> int:
        n = _check_width(n)
        self._bits_read += n

        value = 0
        while n > self._available:
            # high-order part comes from what is left in the register;
            # short reads from the file only mean another refill
            value = (value << self._available) | self._bit_buffer
            n -= self._available
            self._bit_buffer = 0
            self._available = 0
            if not self._fill_bit_buffer():
                raise EOFError("Unexpected end of bitstream")

        shift = self._available - n
        value = (value << n) | (self._bit_buffer >> shift)
        self._bit_buffer &= (1 << shift) - 1
        self._available = shift
        return value

    def _fill_bit_buffer(self) -> bool:
        if self._pos >= len(self._buf):
            if not self._fill_buffer():
                return False
        # a short final block yields fewer than 64 valid bits
        chunk = self._buf[self._pos:self._pos + BIT_BUFFER_SIZE]
        self._pos += len(chunk)
        self._bit_buffer = int.from_bytes(chunk, "big")
        self._available = BYTE_SIZE * len(chunk)
        return True

    def _fill_buffer(self) -> bool:
        # raw streams may return fewer bytes than asked; only b"" is end of stream
        self._buf = self.f.read(BUFFER_SIZE)
        self._pos = 0
        return len(self._buf) > 0


class BitWriter:
    """
    Writes 1..32 bit fields (MSB-first) to a byte stream.
    Whole bytes are queued as they fill; flush() pads the last partial byte
    with zero bits.
    """

    def __init__(self, path_or_file):
        self.f, self._owns_file = _open(path_or_file, "wb")
        self._acc = 0
        self._nbits = 0  # bits currently in _acc (0..7 between calls)
        self._buf = bytearray()
        self._bits_written = 0
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, exc_traceback):
        self.close()

    def _check_open(self):
        if self.closed:
            raise ValueError("I/O operation on closed BitWriter")

    def bits_written(self) -> int:
        return self._bits_written

    def write_bits(self, n: int, value: int):
        """Write the low `n` bits of `value`."""
        self._check_open()
        n = _check_width(n)
        self._acc = (self._acc << n) | (value & ((1 << n) - 1))
        self._nbits += n
        self._bits_written += n
        while self._nbits >= BYTE_SIZE:
            self._nbits -= BYTE_SIZE
            self._buf.append((self._acc >> self._nbits) & 0xFF)
        self._acc &= (1 << self._nbits) - 1
        if len(self._buf) >= BUFFER_SIZE:
            self._drain()

    def write_code(self, code: int, length: int):
        """Write a `length`-bit code of any length, including 0."""
        while length > INT_SIZE:
            length -= INT_SIZE
            self.write_bits(INT_SIZE, code >> length)
        if length > 0:
            self.write_bits(length, code)

    def _drain(self):
        self.f.write(bytes(self._buf))
        self._buf.clear()

    def flush(self):
        """Pad remaining bits with zeros and push everything to the file."""
        self._check_open()
        if self._nbits > 0:
            self._buf.append((self._acc << (BYTE_SIZE - self._nbits)) & 0xFF)
            self._acc = 0
            self._nbits = 0
        self._drain()
        self.f.flush()

    def close(self):
        if self.closed:
            return
        try:
            self.flush()
        finally:
            self.closed = True
            if self._owns_file:
                self.f.close()
