import numpy as np

KINDS = ("uniform", "skewed", "repetitive", "text", "constant")

_WORDS = np.array([b"the", b"of", b"and", b"to", b"in", b"huffman", b"code",
                   b"tree", b"bit", b"stream", b"a", b"is"], dtype=object)

def generate_sample(kind="skewed", size=4096, seed=0) -> bytes:
    """
    Deterministic synthetic input of `size` bytes.
      uniform    - i.i.d. bytes over all 256 values
      skewed     - geometric distribution, few symbols dominate
      repetitive - short random motif repeated, 10% bytes mutated
      text       - space separated words from a small vocabulary
      constant   - one byte value repeated
    """
    rng = np.random.default_rng(seed)
    if size <= 0:
        return b""

    if kind == "uniform":
        x = rng.integers(0, 256, size=size, dtype=np.uint8)
    elif kind == "skewed":
        x = np.minimum(rng.geometric(0.3, size=size) - 1, 255).astype(np.uint8)
    elif kind == "repetitive":
        motif = rng.integers(0, 256, size=16, dtype=np.uint8)
        x = np.resize(motif, size)
        hit = rng.random(size) < 0.1
        x[hit] = rng.integers(0, 256, size=int(hit.sum()), dtype=np.uint8)
    elif kind == "text":
        out = bytearray()
        while len(out) < size:
            out += _WORDS[rng.integers(0, len(_WORDS))] + b" "
        return bytes(out[:size])
    elif kind == "constant":
        x = np.full(size, 0x41, dtype=np.uint8)
    else:
        raise ValueError(f"Unknown sample kind: {kind} (expected one of {KINDS})")
    return x.tobytes()

def save_sample(path="data/sample.bin", kind="skewed", size=4096, seed=0):
    with open(path, "wb") as f:
        f.write(generate_sample(kind=kind, size=size, seed=seed))
    return path

if __name__ == "__main__":
    import os
    os.makedirs("data", exist_ok=True)
    p = save_sample()
    print("Saved:", p)
