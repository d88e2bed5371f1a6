import argparse, os
from bitstream import Header
from codec import compress_file
from metrics import alphabet_size, entropy, avg_code_length, compression_ratio

def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--input", required=True, help="path to any file")
    ap.add_argument("--output", required=True, help="path to .hf")
    ap.add_argument("--header", choices=[h.value for h in Header], default=Header.TREE.value,
                    help="header variant (only 'tree' is supported)")
    args = ap.parse_args(argv)

    os.makedirs(os.path.dirname(args.output) or ".", exist_ok=True)
    counts, codes = compress_file(args.input, args.output, header=Header(args.header))

    n_in = os.path.getsize(args.input)
    n_out = os.path.getsize(args.output)
    print(f"[encode] wrote {args.output}")
    print(f"[encode] header={args.header} alphabet={alphabet_size(counts)} (+EOF)")
    print(f"[encode] entropy={entropy(counts):.3f} b/B avg_code={avg_code_length(counts, codes):.3f} b/B")
    print(f"[encode] {n_in}B -> {n_out}B ratio={compression_ratio(n_in, n_out):.3f}")

if __name__ == "__main__":
    main()
