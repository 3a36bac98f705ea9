#!/usr/bin/env python3
"""Build a surface from a YAML parameter file and report mesh statistics.

Example:
    PYTHONPATH=./src python tools/mesh_stats.py params.yaml --matching position
    PYTHONPATH=./src python tools/mesh_stats.py params.yaml --wireframe
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict, dataclass
from typing import Optional

from revsurf.config import load_parameters, surface_kind
from revsurf.errors import RevsurfError
from revsurf.logging_config import LEVEL_NAMES, setup_logging
from revsurf.normals import NormalMatching, Weighting
from revsurf.surface_data import create_surface_data, create_wireframe_data


@dataclass
class MeshStats:
    surface: str
    vertices: int
    normals: Optional[int] = None
    substituted_normals: Optional[int] = None
    horizontal_lines: Optional[int] = None
    vertical_lines: Optional[int] = None

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}


def mesh_stats(params, *, wireframe: bool = False,
               matching: str = NormalMatching.IDENTITY.value,
               weighting: str = Weighting.UNIFORM.value) -> MeshStats:
    kind = surface_kind(params)
    if wireframe:
        data = create_wireframe_data(params)
        return MeshStats(surface=kind,
                         vertices=data.vertex_count,
                         horizontal_lines=data.horizontal_line_count,
                         vertical_lines=data.vertical_line_count)
    data = create_surface_data(params, matching=NormalMatching(matching),
                               weighting=Weighting(weighting))
    return MeshStats(surface=kind,
                     vertices=data.vertex_count,
                     normals=len(data.normals) // 3,
                     substituted_normals=len(data.substituted))


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("params", help="YAML parameter file")
    parser.add_argument("--wireframe", action="store_true",
                        help="build line strips instead of a shaded mesh")
    parser.add_argument("--matching", choices=[m.value for m in NormalMatching],
                        default=NormalMatching.IDENTITY.value)
    parser.add_argument("--weighting", choices=[w.value for w in Weighting],
                        default=Weighting.UNIFORM.value)
    parser.add_argument("--log-level", choices=[n.lower() for n in LEVEL_NAMES],
                        default="warning")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="shorthand for --log-level debug")
    args = parser.parse_args(argv)

    setup_logging("debug" if args.verbose else args.log_level)

    try:
        surface, _ = load_parameters(args.params)
        stats = mesh_stats(surface, wireframe=args.wireframe,
                           matching=args.matching, weighting=args.weighting)
    except (RevsurfError, FileNotFoundError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(stats.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
