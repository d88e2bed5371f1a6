import argparse, os
from codec import decompress_file

def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--input", required=True, help="path to .hf")
    ap.add_argument("--output", required=True, help="path to restored file")
    args = ap.parse_args(argv)

    os.makedirs(os.path.dirname(args.output) or ".", exist_ok=True)
    # On FormatError / TruncatedBodyError the output may hold a partial prefix.
    decompress_file(args.input, args.output)
    print(f"[decode] wrote {args.output} size={os.path.getsize(args.output)}B")

if __name__ == "__main__":
    main()
