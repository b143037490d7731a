#!/usr/bin/python3

"""Points, bounding boxes and lines in world and geographic coordinates."""

from collections import namedtuple

XZPoint = namedtuple('XZPoint', 'x z')
GeoPoint = namedtuple('GeoPoint', 'lat lng')


class XZBBox(namedtuple('XZBBox', 'min_x min_z max_x max_z')):
    """An inclusive rectangle of block columns on the horizontal plane."""

    __slots__ = ()

    def __new__(cls, min_x, min_z, max_x, max_z):
        if min_x > max_x or min_z > max_z:
            raise ValueError('bounding box ({}, {}) to ({}, {}) is empty'
                             .format(min_x, min_z, max_x, max_z))
        return super().__new__(cls, min_x, min_z, max_x, max_z)

    @classmethod
    def from_lengths(cls, length_x, length_z):
        """Return the box from (0, 0) spanning the given lengths in blocks."""
        return cls(0, 0, int(length_x), int(length_z))

    def contains(self, x, z):
        """Return whether the column (x, z) lies inside the box."""
        return self.min_x <= x <= self.max_x and self.min_z <= z <= self.max_z

    def columns(self):
        """Generate every XZPoint in the box, row by row."""
        for z in range(self.min_z, self.max_z + 1):
            for x in range(self.min_x, self.max_x + 1):
                yield XZPoint(x, z)


class LLBBox(namedtuple('LLBBox', 'min_lat min_lng max_lat max_lng')):
    """A rectangle of latitudes and longitudes, in degrees."""

    __slots__ = ()

    def __new__(cls, min_lat, min_lng, max_lat, max_lng):
        if not (-90 <= min_lat <= max_lat <= 90 and
                -180 <= min_lng <= max_lng <= 180):
            raise ValueError('invalid geographic bounding box: {}, {}, {}, {}'
                             .format(min_lat, min_lng, max_lat, max_lng))
        return super().__new__(cls, min_lat, min_lng, max_lat, max_lng)

    def min(self):
        return GeoPoint(self.min_lat, self.min_lng)

    def max(self):
        return GeoPoint(self.max_lat, self.max_lng)


def bresenham_line(x1, y1, z1, x2, y2, z2):
    """Return the integer points on the line between two points, inclusive.

    The axis with the largest extent is stepped one block at a time; the other
    two axes follow using Bresenham's error terms, so consecutive points always
    touch at least at an edge.
    """
    points = []
    dx, dy, dz = abs(x2 - x1), abs(y2 - y1), abs(z2 - z1)
    xs = 1 if x1 < x2 else -1
    ys = 1 if y1 < y2 else -1
    zs = 1 if z1 < z2 else -1
    x, y, z = x1, y1, z1

    if dx >= dy and dx >= dz:
        p1, p2 = 2*dy - dx, 2*dz - dx
        while x != x2:
            points.append((x, y, z))
            x += xs
            if p1 >= 0:
                y += ys
                p1 -= 2*dx
            if p2 >= 0:
                z += zs
                p2 -= 2*dx
            p1 += 2*dy
            p2 += 2*dz
    elif dy >= dx and dy >= dz:
        p1, p2 = 2*dx - dy, 2*dz - dy
        while y != y2:
            points.append((x, y, z))
            y += ys
            if p1 >= 0:
                x += xs
                p1 -= 2*dy
            if p2 >= 0:
                z += zs
                p2 -= 2*dy
            p1 += 2*dx
            p2 += 2*dz
    else:
        p1, p2 = 2*dy - dz, 2*dx - dz
        while z != z2:
            points.append((x, y, z))
            z += zs
            if p1 >= 0:
                y += ys
                p1 -= 2*dz
            if p2 >= 0:
                x += xs
                p2 -= 2*dz
            p1 += 2*dy
            p2 += 2*dx

    points.append((x2, y2, z2))
    return points
