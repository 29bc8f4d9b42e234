# path: tests/test_renderer_vm.py
import os

from beam_load.domain.loads import PointLoad
from beam_load.engine.diagrams import sample_simple_beam
from beam_load.engine.normalize import BeamGeometry, normalize_loads
from beam_load.view.renderer_vm import save_diagram_images


def test_save_diagram_images(tmp_path):
    geom = BeamGeometry(length_m=1.0, left_m=0.0, right_m=1.0)
    loads = normalize_loads([PointLoad(magnitude_N=1000, position_mm=300)])
    diag = sample_simple_beam(geom, loads, E_Pa=200e9, I_m4=1e-6)

    paths = save_diagram_images(diag, str(tmp_path))
    assert set(paths) == {"v", "m", "d"}
    for p in paths.values():
        assert os.path.exists(p)
        assert os.path.getsize(p) > 0
