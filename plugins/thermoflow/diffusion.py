"""
Explicit Heat-Equation Step

One forward-Euler update of the discretized heat equation with damping:

  laplacian = left + right + up + down - 4 * center
  updated   = (center + alpha * laplacian) * damping

Reads the field's current buffer, writes the interior of the scratch
buffer, then swaps. The one-cell border ring is never written, which
holds it at its initial value (Dirichlet boundary, T = 0).

The 4-neighbor explicit scheme is stable only for alpha <= 0.25. That
bound is enforced as configuration policy (see presets.clamp_config);
a larger alpha is not an error here, it just blows up visibly.
"""

import numpy as np


ALPHA_STABILITY_LIMIT = 0.25


def is_stable(alpha):
    """True when alpha is within the explicit scheme's stability bound."""
    return 0.0 <= alpha <= ALPHA_STABILITY_LIMIT


def diffuse_step(field, alpha, damping=1.0):
    """Advance the field by one iteration. Returns the new current grid."""
    src = field.grid
    dst = field.scratch_grid
    inner = dst[1:-1, 1:-1]

    # 4-neighbor laplacian accumulated directly into the scratch interior
    np.add(src[1:-1, :-2], src[1:-1, 2:], out=inner)
    inner += src[:-2, 1:-1]
    inner += src[2:, 1:-1]
    inner -= 4.0 * src[1:-1, 1:-1]
    inner *= alpha
    inner += src[1:-1, 1:-1]
    inner *= damping

    field.swap_buffers()
    field.iteration += 1
    return field.grid


def diffuse_n(field, n, alpha, damping=1.0):
    """Run n full steps in sequence, each swap completing before the next."""
    for _ in range(n):
        diffuse_step(field, alpha, damping)
    return field.grid
