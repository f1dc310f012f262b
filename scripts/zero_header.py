import sys
from pathlib import Path

def main():
    if len(sys.argv) != 2:
        print("Usage: zero_header.py <file.dex>")
        raise SystemExit(2)

    p = Path(sys.argv[1])
    b = bytearray(p.read_bytes())
    if len(b) < 32 or b[:3] != b"dex":
        print("Not a dex file, refusing to touch it.")
        raise SystemExit(2)

    # Checksum lives at [8, 12), signature at [12, 32).
    b[8:32] = bytes(24)
    p.write_bytes(bytes(b))
    print(f"Zeroed checksum and signature in {p}")

if __name__ == "__main__":
    main()
