# -*- coding: utf-8 -*-
"""Tests for geodetic coordinate conversion functions."""
import numpy as np
import pytest
from grdl_geocam.geometry.coordinates import (
    ecf_to_geodetic,
    geodetic_to_ecf,
    ecf_enu_rotation_matrix,
    geodetic_to_enu,
    enu_to_geodetic,
)
from grdl_geocam.utils.constants import WGS84_A, WGS84_B


class TestECFGeodeticRoundtrip:
    """Test ECF <-> Geodetic roundtrip conversions."""

    def test_origin_point(self):
        x, y, z = geodetic_to_ecf(0.0, 0.0, 0.0)
        assert abs(float(x) - WGS84_A) < 1e-6
        lat, lon, alt = ecf_to_geodetic(x, y, z)
        assert abs(float(lat)) < 1e-10
        assert abs(float(lon)) < 1e-10
        assert abs(float(alt)) < 1e-3

    def test_north_pole(self):
        x, y, z = geodetic_to_ecf(90.0, 0.0, 0.0)
        assert abs(float(z) - WGS84_B) < 1e-3
        lat, lon, alt = ecf_to_geodetic(x, y, z)
        assert abs(float(lat) - 90.0) < 1e-10
        assert abs(float(alt)) < 1e-3

    def test_arbitrary_point(self):
        lat, lon, alt = 35.3, -72.7, 250.0
        x, y, z = geodetic_to_ecf(lat, lon, alt)
        lat2, lon2, alt2 = ecf_to_geodetic(x, y, z)
        assert abs(float(lat2) - lat) < 1e-8
        assert abs(float(lon2) - lon) < 1e-8
        assert abs(float(alt2) - alt) < 1e-3

    def test_vector_input(self):
        lats = np.array([0.0, 45.0, -30.0])
        lons = np.array([0.0, 90.0, -120.0])
        alts = np.array([0.0, 1000.0, 5000.0])
        x, y, z = geodetic_to_ecf(lats, lons, alts)
        lat2, lon2, alt2 = ecf_to_geodetic(x, y, z)
        np.testing.assert_allclose(lat2, lats, atol=1e-8)
        np.testing.assert_allclose(lon2, lons, atol=1e-8)
        np.testing.assert_allclose(alt2, alts, atol=1e-3)

    def test_array_3_input_ecf(self):
        """Test single (3,) vector input."""
        x, y, z = geodetic_to_ecf(38.0, -77.0, 0.0)
        lat, lon, alt = ecf_to_geodetic(np.array([float(x), float(y), float(z)]))
        assert abs(float(lat) - 38.0) < 1e-8
        assert abs(float(lon) - (-77.0)) < 1e-8


class TestENU:
    def test_rotation_is_orthonormal(self):
        rot = ecf_enu_rotation_matrix(35.0, -73.0)
        np.testing.assert_allclose(rot @ rot.T, np.eye(3), atol=1e-12)

    def test_origin_maps_to_zero(self):
        origin = (35.0, -73.0, 100.0)
        enu = geodetic_to_enu(*origin, origin)
        np.testing.assert_allclose(enu, np.zeros(3), atol=1e-6)

    def test_axes_directions(self):
        origin = (35.0, -73.0, 0.0)
        east = geodetic_to_enu(35.0, -72.99, 0.0, origin)
        north = geodetic_to_enu(35.01, -73.0, 0.0, origin)
        up = geodetic_to_enu(35.0, -73.0, 50.0, origin)
        assert east[0] > 0 and abs(east[1]) < 1.0
        assert north[1] > 0 and abs(north[0]) < 1e-6
        np.testing.assert_allclose(up, [0.0, 0.0, 50.0], atol=1e-6)

    def test_roundtrip(self):
        origin = (-33.9, 18.4, 20.0)
        lat, lon, alt = enu_to_geodetic(1234.5, -678.9, 12.0, origin)
        enu = geodetic_to_enu(lat, lon, alt, origin)
        np.testing.assert_allclose(enu, [1234.5, -678.9, 12.0], atol=1e-4)

    def test_enu_to_geodetic_returns_floats(self):
        result = enu_to_geodetic(0.0, 0.0, 0.0, (10.0, 20.0, 0.0))
        assert all(isinstance(v, float) for v in result)
        assert result == pytest.approx((10.0, 20.0, 0.0), abs=1e-6)
