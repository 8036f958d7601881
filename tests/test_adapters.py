# -*- coding: utf-8 -*-
"""Tests for the construction adapters."""
import os
import tempfile
import numpy as np
import pytest
from grdl_geocam.camera.adapters import (
    CanonicalTransform,
    UTMMetadata,
    from_geotiff_header,
    from_geotransform,
    from_tile_filename,
    from_world_file,
    parse_tile_filename,
    tiepoint_transform,
)
from grdl_geocam.exceptions import ConfigurationError, FormatError
from grdl_geocam.io.geotiff_header import GeoKeyHeader

GEOGRAPHIC_KEYS = {1024: 2, 2048: 4326}


class TestUTMMetadata:
    def test_default_is_wgs84(self):
        utm = UTMMetadata()
        assert not utm.is_utm

    def test_from_zone(self):
        assert UTMMetadata.from_zone(18, True) == UTMMetadata(True, 18, True)
        assert not UTMMetadata.from_zone(0).is_utm
        assert not UTMMetadata.from_zone(-3).is_utm


class TestGeoTiffHeader:
    def test_tiepoint_math(self):
        m = tiepoint_transform((2.0, 3.0, 0.5), [(10.0, 20.0, 4.0, 1000.0, 2000.0, 7.0)])
        np.testing.assert_allclose(np.diag(m), [2.0, -3.0, 0.5, 1.0])
        np.testing.assert_allclose(m[:3, 3], [980.0, 2060.0, 5.0])

    def test_utm_pixel_scale(self):
        header = GeoKeyHeader(
            model_pixel_scale=(30.0, 30.0, 0.0),
            model_tiepoints=(0, 0, 0, 444720.0, 3751320.0, 0.0),
            geo_keys={1024: 1, 3072: 32611},
        )
        result = from_geotiff_header(header)
        assert isinstance(result, CanonicalTransform)
        assert result.transform.scale_tag
        assert result.utm == UTMMetadata(True, 11, False)
        assert result.transform.pixel_to_native(1.0, 1.0) == (444750.0, 3751290.0)

    def test_nad83_utm(self):
        header = GeoKeyHeader(
            model_pixel_scale=(1.0, 1.0, 0.0),
            model_tiepoints=(0, 0, 0, 500000.0, 4000000.0, 0.0),
            geo_keys={1024: 1, 3072: 26918},
        )
        assert from_geotiff_header(header).utm == UTMMetadata(True, 18, False)

    def test_southern_utm(self):
        header = GeoKeyHeader(
            model_pixel_scale=(1.0, 1.0, 0.0),
            model_tiepoints=(0, 0, 0, 500000.0, 6000000.0, 0.0),
            geo_keys={1024: 1, 3072: 32734},
        )
        assert from_geotiff_header(header).utm == UTMMetadata(True, 34, True)

    def test_explicit_transform_wins(self):
        m = np.eye(4)
        m[0, 1] = 0.25
        header = GeoKeyHeader(
            model_pixel_scale=(1.0, 1.0, 0.0),
            model_tiepoints=(0, 0, 0, 0.0, 0.0, 0.0),
            model_transformation_values=m.ravel(),
            geo_keys=GEOGRAPHIC_KEYS,
        )
        result = from_geotiff_header(header)
        assert not result.transform.scale_tag
        np.testing.assert_array_equal(result.transform.matrix, m)
        assert not result.utm.is_utm

    def test_explicit_transform_wrong_size(self):
        header = GeoKeyHeader(model_transformation_values=[1.0] * 12, geo_keys=GEOGRAPHIC_KEYS)
        with pytest.raises(ConfigurationError):
            from_geotiff_header(header)

    def test_no_transform(self):
        with pytest.raises(ConfigurationError):
            from_geotiff_header(GeoKeyHeader(geo_keys=GEOGRAPHIC_KEYS))

    def test_missing_tie_points(self):
        header = GeoKeyHeader(model_pixel_scale=(1.0, 1.0, 0.0), geo_keys=GEOGRAPHIC_KEYS)
        with pytest.raises(ConfigurationError):
            from_geotiff_header(header)

    def test_short_tie_point(self):
        header = GeoKeyHeader(
            model_pixel_scale=(1.0, 1.0, 0.0),
            model_tiepoints=(0, 0, 0, 1.0, 2.0),
            geo_keys=GEOGRAPHIC_KEYS,
        )
        with pytest.raises(ConfigurationError):
            from_geotiff_header(header)

    def test_unsupported_model(self):
        header = GeoKeyHeader(
            model_pixel_scale=(1.0, 1.0, 0.0),
            model_tiepoints=(0, 0, 0, 0.0, 0.0, 0.0),
            geo_keys={1024: 1, 3072: 3857},
        )
        with pytest.raises(ConfigurationError):
            from_geotiff_header(header)


class TestGeotransform:
    def test_layout(self):
        result = from_geotransform([100.0, 2.0, 0.1, 200.0, 0.2, -2.0], utm_zone=33)
        m = result.transform.matrix
        assert (m[0, 3], m[0, 0], m[0, 1]) == (100.0, 2.0, 0.1)
        assert (m[1, 3], m[1, 0], m[1, 1]) == (200.0, 0.2, -2.0)
        assert result.transform.scale_tag
        assert result.utm == UTMMetadata(True, 33, False)

    def test_geographic(self):
        result = from_geotransform([-73.0, 0.001, 0.0, 36.0, 0.0, -0.001])
        assert not result.utm.is_utm

    def test_hemisphere_verbatim(self):
        result = from_geotransform([0.0, 1.0, 0.0, 0.0, 0.0, -1.0], 34, southern=True)
        assert result.utm.southern

    def test_wrong_length(self):
        with pytest.raises(ConfigurationError):
            from_geotransform([0.0, 1.0, 0.0, 0.0, 0.0])


class TestTileFilename:
    def test_parse(self):
        tile = parse_tile_filename("/data/dem_N35W73_S0.6x0.6_v2.tif")
        assert tile.hemisphere == 'N' and tile.direction == 'W'
        assert (tile.lat, tile.lon) == (35.0, 73.0)
        assert (tile.scale_lat, tile.scale_lon) == (0.6, 0.6)
        assert tile.label(tile.upper_left_corner()) == "N35.6W73"
        assert tile.label(tile.lower_right_corner()) == "N35W72.4"

    def test_parse_single_scale(self):
        tile = parse_tile_filename("dem_S10E20_S1.5.tif")
        assert (tile.scale_lat, tile.scale_lon) == (1.5, 1.5)

    def test_parse_rectangular_scale(self):
        tile = parse_tile_filename("dem_N35E10_S1x2.tif")
        assert (tile.scale_lat, tile.scale_lon) == (1.0, 2.0)

    def test_global_coordinates(self):
        result = from_tile_filename("dem_N35W73_S0.6x0.6.tif", 1001, 1001, global_coords=True)
        m = result.transform.matrix
        assert result.transform.scale_tag
        assert not result.utm.is_utm
        np.testing.assert_allclose([m[0, 0], m[1, 1]], [0.0006, -0.0006], rtol=1e-12)
        lon, lat = result.transform.pixel_to_native(0.0, 0.0)
        np.testing.assert_allclose([lon, lat], [-73.0 + 0.0005, 35.6 - 0.0005], rtol=1e-12)
        lon, lat = result.transform.pixel_to_native(1000.0, 1000.0)
        np.testing.assert_allclose([lon, lat], [-72.4 + 0.0005, 35.0 - 0.0005], rtol=1e-12)

    def test_native_west(self):
        result = from_tile_filename("dem_N35W73_S0.6x0.6.tif", 1001, 1001)
        m = result.transform.matrix
        assert m[0, 0] < 0 and m[1, 1] < 0
        np.testing.assert_allclose([m[0, 3], m[1, 3]], [73.0 - 0.0005, 35.6 - 0.0005])

    def test_native_south(self):
        result = from_tile_filename("dem_S10E20_S1.tif", 101, 101)
        m = result.transform.matrix
        np.testing.assert_allclose([m[0, 0], m[1, 1]], [0.01, 0.01])
        np.testing.assert_allclose([m[0, 3], m[1, 3]], [20.005, 9.005])

    def test_global_south(self):
        result = from_tile_filename("dem_S10E20_S1.tif", 101, 101, global_coords=True)
        m = result.transform.matrix
        np.testing.assert_allclose([m[0, 0], m[1, 1]], [0.01, -0.01])
        np.testing.assert_allclose([m[0, 3], m[1, 3]], [20.005, -9.005])

    @pytest.mark.parametrize("name", [
        "dem.tif",
        "dem_N35W73.tif",
        "dem_X35Y73_S1.tif",
        "dem_W73N35_S1.tif",
        "dem_NW73_S1.tif",
        "dem_NabcW73_S1.tif",
        "dem_N35W73_0.6.tif",
        "dem_N35W73_Sx.tif",
    ])
    def test_malformed_names(self, name):
        with pytest.raises(FormatError):
            from_tile_filename(name, 100, 100)

    def test_image_too_small(self):
        with pytest.raises(FormatError):
            from_tile_filename("dem_N35W73_S1.tif", 1, 100)


class TestWorldFile:
    def test_read(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "image.tfw")
            with open(path, 'w') as f:
                f.write("0.5\n0.0\n0.0\n-0.5\n500000.25\n4400000.25\n")
            result = from_world_file(path, utm_zone=18)
        m = result.transform.matrix
        assert result.transform.scale_tag
        assert result.utm == UTMMetadata(True, 18, False)
        assert (m[0, 0], m[1, 1], m[0, 3], m[1, 3]) == (0.5, -0.5, 500000.25, 4400000.25)
        assert (m[2, 2], m[3, 3]) == (1.0, 1.0)

    def test_missing_file(self):
        with pytest.raises(FormatError):
            from_world_file("/nonexistent/path/image.tfw")
