import zipfile
from pathlib import Path

import geopandas as gpd
import pytest
from shapely.geometry import Polygon, box

from config.config_loader import load_area_settings


@pytest.fixture
def area_settings(tmp_path: Path):
    return load_area_settings({"area_settings": {"output_dir": str(tmp_path / "out")}})


@pytest.fixture
def unit_square() -> Polygon:
    return box(117.0, 30.0, 117.01, 30.01)


@pytest.fixture
def shapefile_zip(tmp_path: Path):
    """Factory writing a GeoDataFrame as a zipped shapefile, returns the zip path."""

    def _write(gdf: gpd.GeoDataFrame, zip_path: Path, layer: str = "layer") -> Path:
        shp_dir = tmp_path / f"shp_{zip_path.stem}"
        shp_dir.mkdir(parents=True, exist_ok=True)
        gdf.to_file(shp_dir / f"{layer}.shp", driver="ESRI Shapefile")

        zip_path.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(zip_path, "w") as zf:
            for member in sorted(shp_dir.iterdir()):
                zf.write(member, arcname=member.name)
        return zip_path

    return _write
