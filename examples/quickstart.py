#!/usr/bin/env python3
"""
Magic Squares quickstart: build, inspect and check squares.

    pip install magic-squares
    python examples/quickstart.py
"""

from magic_squares import Lcg, analyse_square, generate_magic_square, verify_magic_square

rng = Lcg(seed=2024)

# 1. One square per construction
for order in (5, 6, 8):
    square = generate_magic_square(order, rng=rng)
    print(f"order {order} ({square.kind}), constant {square.magic_constant}")
    print(square.rows())
    print()

# 2. Check a hand-made grid
lo_shu = [8, 1, 6, 3, 5, 7, 4, 9, 2]
print("Lo Shu is magic:", verify_magic_square(lo_shu, 3))

# 3. Explain a grid that only looks magic
fake = [5] * 9
print("Constant grid is magic:", verify_magic_square(fake, 3))
for line in analyse_square(fake, 3).describe():
    print(" ", line)
