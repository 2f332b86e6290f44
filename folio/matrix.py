"""2D affine transformation matrices.

Matrices use the row-vector convention: a point ``(x, y)`` is transformed as
``[x, y, 1] @ matrix``, so ``first @ second`` applies ``first`` then
``second``.

"""

import math


class Matrix(list):
    """Affine matrix ``[[a, b, 0], [c, d, 0], [e, f, 1]]``.

    ``(a, b, c, d, e, f)`` are the values of the CSS ``matrix()`` function.

    """
    def __init__(self, a=1, b=0, c=0, d=1, e=0, f=0, matrix=None):
        if matrix is None:
            matrix = [[a, b, 0], [c, d, 0], [e, f, 1]]
        super().__init__(matrix)

    @classmethod
    def translation(cls, x=0, y=0):
        return cls(e=x, f=y)

    @classmethod
    def scaling(cls, x=1, y=None):
        return cls(a=x, d=x if y is None else y)

    @classmethod
    def rotation(cls, angle):
        """Rotation of ``angle`` radians, clockwise in a y-down system."""
        cos, sin = math.cos(angle), math.sin(angle)
        return cls(a=cos, b=sin, c=-sin, d=cos)

    @classmethod
    def skewing(cls, angle_x=0, angle_y=0):
        return cls(b=math.tan(angle_y), c=math.tan(angle_x))

    @property
    def values(self):
        """The ``(a, b, c, d, e, f)`` values of the matrix."""
        (a, b, _), (c, d, _), (e, f, _) = self
        return a, b, c, d, e, f

    def __matmul__(self, other):
        a1, b1, c1, d1, e1, f1 = self.values
        a2, b2, c2, d2, e2, f2 = other.values
        return Matrix(
            a1 * a2 + b1 * c2, a1 * b2 + b1 * d2,
            c1 * a2 + d1 * c2, c1 * b2 + d1 * d2,
            e1 * a2 + f1 * c2 + e2, e1 * b2 + f1 * d2 + f2)

    @property
    def determinant(self):
        a, b, c, d, _, _ = self.values
        return a * d - b * c

    @property
    def invert(self):
        """Inverse matrix, raise :exc:`ZeroDivisionError` if singular."""
        a, b, c, d, e, f = self.values
        det = self.determinant
        return Matrix(
            d / det, -b / det, -c / det, a / det,
            (c * f - d * e) / det, (b * e - a * f) / det)

    @property
    def is_identity(self):
        return self.values == (1, 0, 0, 1, 0, 0)

    def transform_point(self, x, y):
        a, b, c, d, e, f = self.values
        return x * a + y * c + e, x * b + y * d + f

    def transform_rectangle(self, x, y, width, height):
        """Return the bounding box of a transformed rectangle.

        The rectangle and the result are axis-aligned, the result is given
        as ``(x1, y1, x2, y2)``.

        """
        xs, ys = zip(*(
            self.transform_point(corner_x, corner_y)
            for corner_x in (x, x + width) for corner_y in (y, y + height)))
        return min(xs), min(ys), max(xs), max(ys)
