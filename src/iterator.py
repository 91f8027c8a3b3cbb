# iterator.py
"""
Cursors over the cells of a Geometry.

A cursor holds a linear cell index ``value = j*(Nx+2) + i`` over the full
array (ghost layer included). The different cursors only differ in the
subset of cells they enumerate; stepping to a neighbour always yields a
plain full-array ``Iterator``.
"""
import copy

debugging = False

# Boundary selectors
BOTTOM = 1
RIGHT = 2
TOP = 3
LEFT = 4


class Iterator:
    """Enumerates every cell of the array, x index fastest."""

    def __init__(self, geom, value: int = 0) -> None:
        self._geom = geom
        self._width = geom.Nx + 2
        self._value = value
        self._valid = 0 <= value < geom.cellCount

    @property
    def value(self) -> int:
        return self._value

    def first(self) -> None:
        self._value = 0
        self._valid = True

    def valid(self) -> bool:
        return self._valid

    def next(self) -> None:
        if not self._valid:
            return
        self._value += 1
        if self._value >= self._geom.cellCount:
            self._valid = False

    def pos(self):
        if not self._valid:
            raise IndexError("cursor has run past its last cell")
        return (self._value % self._width, self._value // self._width)

    def __iter__(self):
        # walk a private copy, so nested loops over one cursor do not interfere
        cursor = copy.copy(self)
        cursor.first()
        while cursor.valid():
            yield Iterator(self._geom, cursor._value)
            cursor.next()

    # ------------------------------------------------------------------
    # Neighbours. Stepping off the array stays on the current cell.
    # ------------------------------------------------------------------
    def left(self) -> "Iterator":
        i, _ = self.pos()
        if i == 0:
            return Iterator(self._geom, self._value)
        return Iterator(self._geom, self._value - 1)

    def right(self) -> "Iterator":
        i, _ = self.pos()
        if i == self._width - 1:
            return Iterator(self._geom, self._value)
        return Iterator(self._geom, self._value + 1)

    def down(self) -> "Iterator":
        _, j = self.pos()
        if j == 0:
            return Iterator(self._geom, self._value)
        return Iterator(self._geom, self._value - self._width)

    def top(self) -> "Iterator":
        _, j = self.pos()
        if j == self._geom.Ny + 1:
            return Iterator(self._geom, self._value)
        return Iterator(self._geom, self._value + self._width)

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------
    def printNeighbours(self) -> None:
        print(
            f"cell {self.pos()}: left {self.left().pos()}, right {self.right().pos()}, "
            f"down {self.down().pos()}, top {self.top().pos()}"
        )

    def testRun(self, printNeighbours: bool = False) -> int:
        """Walk the whole subset once, printing every cell. Returns the count."""
        count = 0
        for cell in self:
            if printNeighbours:
                cell.printNeighbours()
            else:
                print(cell.pos())
            count += 1
        return count

    def __eq__(self, other) -> bool:
        if not isinstance(other, Iterator):
            return NotImplemented
        return self._geom is other._geom and self._value == other._value

    def __hash__(self) -> int:
        return hash((id(self._geom), self._value))

    def __repr__(self) -> str:
        if self._valid:
            return f"{type(self).__name__}(pos={self.pos()})"
        return f"{type(self).__name__}(exhausted)"


class InteriorIterator(Iterator):
    """Enumerates the cells 1..Nx x 1..Ny."""

    def __init__(self, geom) -> None:
        super().__init__(geom)
        self.first()

    def first(self) -> None:
        self._value = self._width + 1
        self._valid = True

    def next(self) -> None:
        if not self._valid:
            return
        self._value += 1
        if self._value % self._width == self._width - 1:
            # jump over the right and the left ghost cell
            self._value += 2
        if self._value >= (self._geom.Ny + 1) * self._width:
            self._valid = False


class BoundaryIterator(Iterator):
    """
    Enumerates the ghost cells along one wall, corners excluded.

    BOTTOM and TOP run over i = 1..Nx, LEFT and RIGHT over j = 1..Ny.
    """

    def __init__(self, geom, boundary: int = BOTTOM) -> None:
        super().__init__(geom)
        self.setBoundary(boundary)

    def setBoundary(self, boundary: int) -> None:
        geom = self._geom
        width = self._width

        if boundary == BOTTOM:
            start, stride, count = 1, 1, geom.Nx
        elif boundary == TOP:
            start, stride, count = (geom.Ny + 1) * width + 1, 1, geom.Nx
        elif boundary == LEFT:
            start, stride, count = width, width, geom.Ny
        elif boundary == RIGHT:
            start, stride, count = width + geom.Nx + 1, width, geom.Ny
        else:
            raise ValueError(f"unknown boundary {boundary!r}")

        self.boundary = boundary
        self._start = start
        self._stride = stride
        self._end = start + stride * count

        if debugging:
            print(f"boundary {boundary}: start {start}, stride {stride}, count {count}")

        self.first()

    def first(self) -> None:
        self._value = self._start
        self._valid = self._start < self._end

    def next(self) -> None:
        if not self._valid:
            return
        self._value += self._stride
        if self._value >= self._end:
            self._valid = False

    # The corners do not depend on the selected wall
    def cornerBottomLeft(self) -> "CornerIterator":
        return CornerIterator(self._geom, 0)

    def cornerBottomRight(self) -> "CornerIterator":
        return CornerIterator(self._geom, self._width - 1)

    def cornerTopLeft(self) -> "CornerIterator":
        return CornerIterator(self._geom, (self._geom.Ny + 1) * self._width)

    def cornerTopRight(self) -> "CornerIterator":
        return CornerIterator(self._geom, self._geom.cellCount - 1)


class CornerIterator(Iterator):
    """A cursor over a single ghost corner."""

    def __init__(self, geom, value: int) -> None:
        super().__init__(geom, value)
        self._corner = value

    def first(self) -> None:
        self._value = self._corner
        self._valid = True

    def next(self) -> None:
        self._valid = False
