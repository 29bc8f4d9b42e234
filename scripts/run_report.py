# path: scripts/run_report.py
import os
import sys
import traceback
from datetime import datetime

THIS_DIR = os.path.dirname(os.path.abspath(__file__))
ROOT = os.path.abspath(os.path.join(THIS_DIR, ".."))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from beam_load.services.logging_setup import setup_logging
logger = setup_logging()

def _excepthook(exctype, value, tb):
    msg = "".join(traceback.format_exception(exctype, value, tb))
    logger.error("Excepción no capturada:\n%s", msg)
    sys.__excepthook__(exctype, value, tb)

sys.excepthook = _excepthook

from beam_load.domain.configs import BaseFrameConfig
from beam_load.engine.analysis import compute_results, compute_diagrams
from beam_load.materials.material_db import MaterialDB
from beam_load.sections.profiles import CChannelProfile
from beam_load.services.memoria_calculo_pdf import MemoriaHeader, build_memoria_caso, export_memoria_pdf
from beam_load.services.weight_import import (
    convert_imported_components, convert_imported_sections, create_weight_import_template,
    parse_weight_import_json,
)


def main(out_pdf: str = "memoria_bastidor.pdf"):
    # caso de ejemplo a partir de la plantilla de importación
    data = parse_weight_import_json(create_weight_import_template())
    L = data.frame_length_mm or 2000.0
    W = data.frame_width_mm or 1000.0

    sections = convert_imported_sections(data.sections, L)
    loads = convert_imported_components(data.components, sections, W)
    config = BaseFrameConfig(length_mm=L, width_mm=W, sections=tuple(sections))

    profile = CChannelProfile(height_mm=218, flange_width_mm=66, flange_thickness_mm=3, web_thickness_mm=44.8)
    material = MaterialDB.default().resolve("ASTM A36 Structural Steel")
    density = 7850.0

    res = compute_results(config, loads, None, profile, material, density)
    diag = compute_diagrams(config, loads, res)
    logger.info("FS=%.2f, R=%s", res.safety_factor, [round(r, 1) for r in res.corner_reactions.as_tuple()])

    header = MemoriaHeader(titulo="Memoria de Cálculo - Bastidor", fecha=datetime.now())
    caso = build_memoria_caso(config, loads, profile, material, density)
    export_memoria_pdf(out_pdf, header, caso, res, diagrams=diag)


if __name__ == "__main__":
    main(*sys.argv[1:2])
