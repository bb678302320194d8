"""Read a ModelSnapshot from an IFC file.

Uses ifcopenshell.geom to take a world-coordinate bounding box of every
IfcWall, IfcBuildingStorey names as level markers, and IfcSpace names and
floor areas as rooms. Project attributes come from IfcProject plus the
property sets attached to the project and building.

IFC has no schedule views; the area schedule is supplied separately.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import numpy as np

from plansync.core.contracts import LevelMarker, LinearExtent, ModelSnapshot, SpatialZone
from .geometry import FOOT_IN_METRES, bounds_from_points

logger = logging.getLogger(__name__)

# (property set, property) pairs checked in order for a space's floor area
SPACE_AREA_PROPERTIES = [
    ("Qto_SpaceBaseQuantities", "NetFloorArea"),
    ("Qto_SpaceBaseQuantities", "GrossFloorArea"),
    ("Pset_SpaceCommon", "NetPlannedArea"),
    ("Pset_SpaceCommon", "GrossFloorArea"),
    ("BaseQuantities", "NetFloorArea"),
    ("BaseQuantities", "GrossFloorArea"),
]


def _wall_extents(ifc, settings) -> list[LinearExtent]:
    import ifcopenshell.geom

    extents = []
    for wall in ifc.by_type("IfcWall"):
        try:
            shape = ifcopenshell.geom.create_shape(settings, wall)
        except (RuntimeError, ValueError):
            logger.debug(f"Failed to create shape for {wall.Name or wall.id()}")
            continue

        verts = np.array(shape.geometry.verts, dtype=np.float64).reshape(-1, 3)
        bounds = bounds_from_points(verts)
        if bounds is None:
            continue
        # Geometry comes back in metres
        lo, hi = bounds[0] / FOOT_IN_METRES, bounds[1] / FOOT_IN_METRES
        extents.append(LinearExtent(min_xyz=lo.tolist(), max_xyz=hi.tolist()))
    return extents


def _space_area(psets: dict[str, dict[str, Any]]) -> float:
    for pset_name, prop in SPACE_AREA_PROPERTIES:
        value = psets.get(pset_name, {}).get(prop)
        if isinstance(value, (int, float)) and value > 0:
            return float(value)
    return 0.0


def _scalar_properties(psets: dict[str, dict[str, Any]]) -> dict[str, str]:
    """Flatten property sets into name -> text, skipping ids and non-scalars."""
    props: dict[str, str] = {}
    for values in psets.values():
        for key, value in values.items():
            if key == "id" or value is None or isinstance(value, (dict, list, tuple)):
                continue
            props[key] = str(value)
    return props


def _project_attributes(ifc) -> dict[str, str]:
    import ifcopenshell.util.element

    attrs: dict[str, str] = {}
    for building in ifc.by_type("IfcBuilding"):
        attrs.update(_scalar_properties(ifcopenshell.util.element.get_psets(building)))

    projects = ifc.by_type("IfcProject")
    if projects:
        project = projects[0]
        attrs.update(_scalar_properties(ifcopenshell.util.element.get_psets(project)))
        if not attrs.get("Project Name"):
            attrs["Project Name"] = project.LongName or project.Name or ""
    return attrs


def read_ifc_model(ifc_path: Path) -> ModelSnapshot:
    """Read walls, storeys, spaces and project attributes from an IFC file."""
    import ifcopenshell
    import ifcopenshell.geom
    import ifcopenshell.util.element

    ifc = ifcopenshell.open(str(ifc_path))
    settings = ifcopenshell.geom.settings()
    settings.set(settings.USE_WORLD_COORDS, True)

    walls = _wall_extents(ifc, settings)
    levels = [LevelMarker(name=s.Name or "") for s in ifc.by_type("IfcBuildingStorey")]
    rooms = [
        SpatialZone(
            name=space.LongName or space.Name or "",
            area=_space_area(ifcopenshell.util.element.get_psets(space)),
        )
        for space in ifc.by_type("IfcSpace")
    ]

    logger.info(
        f"Read {ifc_path.name}: {len(walls)} walls, {len(levels)} storeys, {len(rooms)} spaces"
    )
    return ModelSnapshot(
        source=str(ifc_path),
        project_info=_project_attributes(ifc),
        walls=walls,
        levels=levels,
        rooms=rooms,
    )
