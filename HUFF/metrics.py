import numpy as np

def alphabet_size(counts: np.ndarray) -> int:
    return int(np.count_nonzero(counts))

def entropy(counts: np.ndarray) -> float:
    """Shannon entropy in bits per input byte (0.0 for empty input)."""
    c = np.asarray(counts, dtype=np.float64)
    total = c.sum()
    if total == 0:
        return 0.0
    p = c[c > 0] / total
    return float(-(p * np.log2(p)).sum())

def avg_code_length(counts: np.ndarray, codes) -> float:
    """Mean code length in bits per input byte, PSEUDO_EOF excluded."""
    c = np.asarray(counts, dtype=np.float64)
    total = c.sum()
    if total == 0:
        return 0.0
    lengths = np.array([codes[s][1] if c[s] > 0 else 0 for s in range(c.size)], dtype=np.float64)
    return float((c * lengths).sum() / total)

def compression_ratio(original_bytes: int, compressed_bytes: int) -> float:
    if compressed_bytes == 0:
        return float("inf")
    return float(original_bytes) / float(compressed_bytes)
