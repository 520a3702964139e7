# parosol

Building blocks for voxel-based finite element analysis of trabecular bone.
Each voxel of a bone image is treated as a trilinear 8-node hexahedral
element. The package provides the element mathematics, octree node keys, a
process-grid layout helper and iterative solvers. The solvers work with any
stiffness operator that you supply through a small abstract interface.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

### `parosol.fem_basics`

These are the pieces of an element computation. All of them work on numpy arrays.

- `d_mat(e, v, nst=6)`: the isotropic stress-strain matrix for Young's
  modulus `e` and Poisson's ratio `v`.
- `sample(nip)`: Gauss points (`nip` x 3) and weights for a hexahedron.
  Rules with 1, 8, 14, 15 and 27 points are supported. Any other count
  raises `ValueError`.
- `shape_der(points, ipoint)`: the 3 x 8 local shape-function derivatives
  at one integration point.
- `determinant(a)` and `invert(a)`: determinant and inverse of a 1x1, 2x2
  or 3x3 matrix. `invert` raises `ZeroDivisionError` for a singular matrix.
- `b_mat(deriv)`: the strain-displacement matrix from the global derivatives.
- `invar(stress)`: returns `(sigma, dsbar, theta)` for a 4- or
  6-component stress vector. These are the mean stress, the von Mises
  equivalent stress and the Lode angle.

### `parosol.fem`

- `stiffness_matrix(mat_prop, coord, nip=8)`: the 24 x 24 element stiffness
  matrix, computed by Gauss integration. `mat_prop` holds Young's modulus
  and Poisson's ratio. `coord` holds the eight nodal coordinates.
- `element_stress(mat_prop, coord, eld, nip=8)`: strains and stresses at
  the Gauss points for the element displacements `eld`. The result is an
  `ElementStress` with the fields `strain`, `stress`, `sigma` and `theta`.
  The last column of `stress` holds the von Mises stress. The last column
  of `strain` holds the strain energy density.

### `parosol.toolbox`

- `element_coords(a, b, c)`: the (8, 3) corner coordinates of an
  `a` x `b` x `c` box with one corner at the origin.
- `element_coords_from_resolution(res)`: the same box, built from a
  resolution triple.

### `parosol.keys`

- `OctreeKeyLoop` and `OctreeKeyLookup` map voxel coordinates `(x, y, z)`
  to interleaved octree (Morton) keys. The lowest 16 bits of each
  coordinate are used.
- `OctreeKeyLookup.inc_x`, `inc_y` and `inc_z` step a key by one voxel
  without decoding it.

### `parosol.layout`

- `factor(n)`: the prime factors of `n` in ascending order.
- `compute_dims(n)`: three ascending dimensions whose product is `n`,
  chosen to be as close to a cube as possible.
- `CPULayout(rank, size)`: the process grid (`grid`) and the position of
  `rank` in it (`coord`). The x position varies fastest.

### `parosol.timing`

- `Timer` keeps named wall-clock timers with `start`, `restart`, `stop`
  and `elapsed_time`. Stopping a timer that is not running raises
  `KeyError`.
- `elapsed_time` returns a `Timing` with `min`, `avg` and `max`. The timer
  measures only the current process, so the three values are equal.

### `parosol.boundary`

- `BoundaryDisp` holds the direction and the prescribed value of a
  boundary condition. Objects compare by direction only.
- `BCItem` holds the voxel coordinates and the direction of a boundary
  entry. Items are ordered z first, then y, x and direction.
- `BaseGrid` is a container for a voxel image, its dimensions and
  resolution, its material maps and its boundary data.
- `BoundaryCondition.generate(fixed_list, loaded_list)` turns
  `(node, BoundaryDisp)` pairs into displacement-vector indices
  (`node * 3 + direction`) and values.

### `parosol.solver`

These are the abstract interfaces.

- `Solver` requires `solve(b, x=None)` and `label()`.
- `StiffnessMatrix` requires `apply(x)`, `label()`, `diagonal()` and
  `nr_dofs()`. Note that `diagonal()` must return the pseudo-inverse of
  the diagonal, not the diagonal itself. Default implementations are
  given for `dot(a, b)` and for `set_vector_random()`. The latter returns
  uniform values in [-1, 1].

### `parosol.iterative`

- `PCGSolver(matrix, preconditioner, tol=1e-10, max_iter=500, verbose=True, freq=4)`:
  preconditioned conjugate gradients with a relative residual tolerance.
  With `verbose` set, it prints the residual every `freq` iterations.
  After `solve`, the number of iterations done is stored in `iterations`.
- `Jacobi(matrix)`: a preconditioner that multiplies by the inverse
  diagonal.
- `JacobiSmoother(matrix, steps, w, zero_start)`: damped Jacobi
  iteration. `with_zero_start(flag)` returns a copy with another start
  mode.
- `MlLevelCG(matrix)`: Jacobi-preconditioned CG with tolerance 1e-7 and
  at most 20 iterations. It is meant as a coarse-level solver.

### `parosol.tri_eig`

- `calculate_shift(d2, d1, off)`: the shift for one QL step.
- `ql_tridiagonal_symmetric(diagonal, off, n, max_iteration_count)`: the
  eigenvalues of a symmetric tridiagonal matrix. It raises
  `ArithmeticError` if the iteration limit is reached.

### `parosol.eigen`

- `estimate_eigenvalues(matrix, preconditioner, max_iter)` runs
  preconditioned CG from a right-hand side of ones. It then takes the
  eigenvalues of the resulting Lanczos tridiagonal matrix. The result is
  an `EigenBounds(large, small)`.

## Examples

Element stiffness matrix of a unit voxel:

```python
import numpy as np
from parosol.fem import stiffness_matrix
from parosol.toolbox import element_coords

km = stiffness_matrix(np.array([1.0, 0.3]), element_coords(1.0, 1.0, 1.0), 8)
print(km.shape)  # (24, 24)
```

Solving with your own operator:

```python
import numpy as np
from parosol.solver import StiffnessMatrix
from parosol.iterative import Jacobi, PCGSolver
from parosol.eigen import estimate_eigenvalues


class Dense(StiffnessMatrix):
    def __init__(self, a):
        self.a = a

    def apply(self, x):
        return self.a @ x

    def label(self):
        return "Dense matrix"

    def diagonal(self):
        return 1.0 / np.diag(self.a)

    def nr_dofs(self):
        return self.a.shape[0]


a = np.array([[4.0, 1.0, 0.0], [1.0, 3.0, 1.0], [0.0, 1.0, 2.0]])
matrix = Dense(a)
solver = PCGSolver(matrix, Jacobi(matrix), tol=1e-10, verbose=False)
x = solver.solve(np.array([1.0, 2.0, 3.0]))
print(x, solver.iterations)

bounds = estimate_eigenvalues(matrix, Jacobi(matrix), 10)
print(bounds.small, bounds.large)
```

## What this package does not do

- It does not read voxel images or boundary conditions from files.
  `BaseGrid` is only a container, and you fill it yourself.
- It does not assemble an octree mesh for a whole bone. It also has no
  ready-made matrix-free stiffness operator for such a mesh, so you
  supply the operator as a `StiffnessMatrix`.
- It has no complete multigrid preconditioner. `MlLevelCG` and
  `JacobiSmoother` are only pieces that such a cycle would use.
- It does not compute post-processed results for a whole mesh, and it
  does not write solution files.
- It has no command-line program.
- It runs in a single process. `CPULayout` only computes how processes
  would be arranged, and `Timer` measures only the current process.