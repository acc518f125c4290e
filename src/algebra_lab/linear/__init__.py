"""Vectors, matrices and their builders."""

from algebra_lab.linear.factories import identity_matrix, zero_matrix, zero_vector
from algebra_lab.linear.matrix import Matrix, MatrixBuilder
from algebra_lab.linear.vector import Vector, VectorBuilder

__all__ = [
    "Matrix",
    "MatrixBuilder",
    "Vector",
    "VectorBuilder",
    "identity_matrix",
    "zero_matrix",
    "zero_vector",
]
