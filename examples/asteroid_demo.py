#!/usr/bin/env python3
"""
Simple demo script showing asteroid generation capabilities.
"""

import numpy as np
from py_astgen.core import generate, simulate


def main():
    """Demonstrate asteroid generation."""
    print("Py-AstGen Generation Demo")
    print("=" * 40)

    area = 5000
    axes = {"round": None, "horizontal": (1.0, 0.0), "diagonal": (1.0, 1.0)}

    for name, axis in axes.items():
        print(f"\n{name.upper()} growth:")
        print("-" * 30)

        result = simulate(area, 4, axis, seed=2024)
        rows, cols = np.nonzero(result.filled_mask().pixels)

        print(f"  Canvas: {result.size[0]}x{result.size[1]}")
        print(f"  Pixels grown: {result.accepted} of {area}")
        print(f"  Spread x/y: {np.std(cols):.1f} / {np.std(rows):.1f}")
        print("  Bands:")
        for index, band in enumerate(result.bands):
            bar = '#' * int(band.pixel_count / area * 80)
            print(f"    {index}: intensity {band.intensity:3d} {bar} ({band.pixel_count})")

    print("\n\nWriting smoothed, blurred rock to demo_rock.png ...")
    asteroid = generate(area, 4, (1.0, 0.4), seed=2024).smoothen_all(2).blur_gray(1.2)
    asteroid.save_gray("demo_rock.png")
    asteroid.combine_colored((180, 140, 110)).save_colored("demo_rock_color.png")
    print("Done.")


if __name__ == "__main__":
    main()
