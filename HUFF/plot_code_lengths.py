import argparse, os
import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from bitpack import BitReader
from bitstream import ALPH_SIZE
from codec import read_counts
from huffman import build_tree, build_codebook

def plot_code_lengths(counts: np.ndarray, path: str):
    codes = build_codebook(build_tree(counts))
    syms = np.nonzero(counts)[0]
    lengths = np.array([codes[s][1] for s in syms])

    fig, (ax0, ax1) = plt.subplots(2, 1, figsize=(10, 5), sharex=True)
    ax0.bar(syms, counts[syms], width=1.0)
    ax0.set_ylabel("count")
    ax0.set_title("Symbol frequency / Huffman code length")
    ax1.bar(syms, lengths, width=1.0, color="tab:orange")
    ax1.set_ylabel("code length (bits)")
    ax1.set_xlabel("byte value")
    ax1.set_xlim(-1, ALPH_SIZE)

    fig.tight_layout()
    fig.savefig(path, dpi=150)
    plt.close(fig)
    return path

def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--input", required=True, help="file to analyse")
    ap.add_argument("--output", default="results/code_lengths.png")
    args = ap.parse_args(argv)

    with BitReader(args.input) as br:
        counts = read_counts(br)

    os.makedirs(os.path.dirname(args.output) or ".", exist_ok=True)
    plot_code_lengths(counts, args.output)
    print(f"[plot] wrote {args.output}")

if __name__ == "__main__":
    main()
