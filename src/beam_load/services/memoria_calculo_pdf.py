# path: src/beam_load/services/memoria_calculo_pdf.py
from __future__ import annotations

import logging
import math
import os
import tempfile
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional, Sequence, Tuple
from xml.sax.saxutils import escape

from reportlab.lib import colors, pagesizes
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Image, PageBreak, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from beam_load.domain.configs import AnalysisConfiguration, BaseFrameConfig
from beam_load.domain.frame_sections import FrameSection
from beam_load.domain.loads import DistributedLoad, Load, PointLoad, UniformLoad
from beam_load.domain.results import Diagrams, Results
from beam_load.domain.units import ForceUnit, to_newtons
from beam_load.engine.normalize import normalize_loads
from beam_load.materials.material_db import Material
from beam_load.sections.profiles import CrossSectionProfile
from beam_load.view.renderer_vm import save_diagram_images

logger = logging.getLogger(__name__)

# Nota: este módulo NO contiene cálculo estructural. Consume Results / Diagrams
# ya calculados por el motor y, opcionalmente, paths a imágenes ya generadas.


@dataclass(frozen=True)
class MemoriaHeader:
    titulo: str
    cliente_proyecto: str = ""
    autor: str = ""
    fecha: Optional[datetime] = None
    revision: str = "A"


@dataclass(frozen=True)
class MemoriaCaso:
    tipo_analisis: str                      # "Simple Beam" / "Base Frame"
    geometria: Sequence[Tuple[str, str]]    # (propiedad, valor)
    perfil: Sequence[Tuple[str, str]]
    material: Sequence[Tuple[str, str]]
    cargas: Sequence[Tuple[str, str, str, float]]   # (nombre, tipo, detalle, F total [N])
    tramos: Sequence[Tuple[str, str, float]] = ()   # (nombre, [x1,x2], F total [N])

    @property
    def is_frame(self) -> bool:
        return self.tipo_analisis == "Base Frame"


def build_memoria_caso(
    config: AnalysisConfiguration,
    loads: Sequence[Load],
    cross_section: CrossSectionProfile,
    material: Material,
    density_kg_m3: float,
    sections: Optional[Sequence[FrameSection]] = None,
) -> MemoriaCaso:
    """Arma las filas descriptivas del caso a partir de las mismas entradas del motor."""
    if isinstance(config, BaseFrameConfig):
        geometria = [
            ("Largo del bastidor [mm]", _f(config.length_mm, 0)),
            ("Ancho del bastidor [mm]", _f(config.width_mm, 0)),
        ]
        if sections is None:
            sections = config.sections
    else:
        geometria = [
            ("Largo de viga [mm]", _f(config.length_mm, 0)),
            ("Apoyo izquierdo [mm]", _f(config.left_support_mm, 0)),
            ("Apoyo derecho [mm]", _f(config.right_support_mm, 0)),
            ("Luz [mm]", _f(config.right_support_mm - config.left_support_mm, 0)),
        ]
        sections = ()

    perfil = [("Tipo", cross_section.kind)]
    perfil += [(k.replace("_mm", " [mm]").replace("_", " "), _f(v, 2)) for k, v in vars(cross_section).items()]

    mat = [
        ("Material", material.id),
        ("Fluencia fy [MPa]", _f(material.yield_strength_MPa, 1)),
        ("Módulo E [GPa]", _f(material.elastic_modulus_GPa, 1)),
        ("Densidad del perfil [kg/m³]", _f(density_kg_m3, 0)),
        ("Poisson ν", _f(material.poissons_ratio, 3)),
        ("Dilatación α [1/°C]", f"{material.thermal_expansion:.2e}"),
    ]

    cargas: List[Tuple[str, str, str, float]] = []
    for k, ld in enumerate(loads, start=1):
        nl = normalize_loads([ld])
        total = sum(p.F_N for p in nl.point_loads) + sum(u.total_N for u in nl.uniform_loads) \
            + sum(d.total_N for d in nl.dist_loads)
        cargas.append((ld.name or f"Carga {k}", *_describe_load(ld), total))

    tramos = [
        (
            s.name or s.id,
            f"[{_f(s.start_mm, 0)}, {_f(s.end_mm, 0)}] mm",
            to_newtons(s.casing_weight, s.casing_weight_unit) + to_newtons(s.primary_load, s.primary_load_unit),
        )
        for s in sections
    ]

    return MemoriaCaso(
        tipo_analisis=config.label,
        geometria=geometria,
        perfil=perfil,
        material=mat,
        cargas=cargas,
        tramos=tramos,
    )


def _describe_load(ld: Load) -> Tuple[str, str]:
    u = ForceUnit.parse(ld.unit).value
    if isinstance(ld, PointLoad):
        return "Puntual", f"{_f(ld.magnitude_N, 2)} {u} en x={_f(ld.position_mm, 0)} mm"
    if isinstance(ld, UniformLoad):
        return "Uniforme", f"{_f(ld.magnitude_N_per_m, 2)} {u}/m en [{_f(ld.start_mm, 0)}, {_f(ld.end_mm, 0)}] mm"
    if isinstance(ld, DistributedLoad):
        if ld.length_mm and ld.width_mm:
            foot = f"{_f(ld.length_mm, 0)} x {_f(ld.width_mm, 0)} mm"
        else:
            foot = f"A={_f(ld.area_m2 or 0.0, 4)} m²"
        return "Distribuida", f"{_f(ld.magnitude_N_per_m2, 2)} {u}/m² desde x={_f(ld.start_mm, 0)} mm, {foot}"
    return type(ld).__name__, "-"


def export_memoria_pdf(
    out_pdf_path: str,
    header: MemoriaHeader,
    caso: MemoriaCaso,
    results: Results,
    diagrams: Optional[Diagrams] = None,
    imagenes: Optional[Dict[str, str]] = None,
    page_size=pagesizes.A4,
) -> None:
    """
    Genera la Memoria de Cálculo en PDF (A4).

    Imágenes: claves "v", "m", "d" (corte, momento, flecha). Si no se pasan y hay
    'diagrams', se renderizan con matplotlib en un directorio temporal.
    """
    imgs = _normalize_images_dict(imagenes)

    with tempfile.TemporaryDirectory() as td:
        if diagrams is not None and not imgs:
            imgs = save_diagram_images(diagrams, td)
        _build(out_pdf_path, header, caso, results, imgs, page_size)

    logger.info("Memoria de cálculo exportada: %s", out_pdf_path)


def _build(out_pdf_path: str, header: MemoriaHeader, caso: MemoriaCaso, results: Results,
           imgs: Dict[str, str], page_size) -> None:
    styles = getSampleStyleSheet()
    styles.add(ParagraphStyle(name="H1c", parent=styles["Heading1"], alignment=TA_CENTER))
    styles.add(ParagraphStyle(name="Small", parent=styles["BodyText"], fontSize=9, leading=11))

    doc = SimpleDocTemplate(
        out_pdf_path,
        pagesize=page_size,
        leftMargin=15 * mm,
        rightMargin=15 * mm,
        topMargin=12 * mm,
        bottomMargin=12 * mm,
        title=header.titulo,
    )

    story: List[object] = []

    # ----------------- Portada -----------------
    story.append(Paragraph(header.titulo, styles["H1c"]))
    story.append(Spacer(1, 4 * mm))

    fecha = header.fecha or datetime.now()
    meta_rows = [
        ["Proyecto / Cliente:", header.cliente_proyecto or "-"],
        ["Autor:", header.autor or "-"],
        ["Fecha:", fecha.strftime("%Y-%m-%d %H:%M")],
        ["Revisión:", header.revision],
        ["Tipo de análisis:", "Bastidor rectangular" if caso.is_frame else "Viga simplemente apoyada"],
    ]
    t = Table(meta_rows, colWidths=[40 * mm, 140 * mm])
    t.setStyle(_kv_table_style())
    story.append(t)
    story.append(Spacer(1, 6 * mm))

    # ----------------- Base teórica -----------------
    story.append(Paragraph("Base teórica y supuestos", styles["Heading2"]))
    base = [
        "Hipótesis: material elástico lineal, pequeñas deformaciones, viga de Euler-Bernoulli, carga cuasi-estática.",
        "Unidades internas: N y m. Conversión 1 kgf = 9,81 N; 1 lbf = 4,44822 N.",
        "Tensión normal σ = M / W; tensión de corte τ = 1,5·V / A; FS = fy / σ.",
        "Flecha informada: δ = 5·F·L⁴ / (384·E·I) con F la carga total aplicada.",
    ]
    if caso.is_frame:
        base += [
            "Reacciones en esquinas por método de áreas: cada esquina toma la fracción del área "
            "entre el centroide de la carga y la esquina opuesta.",
            "Tensiones y flecha sobre la viga crítica (lado mayor) con q = (F/4)/Lc, simplemente apoyada.",
        ]
    else:
        base += [
            "Reacciones por equilibrio de momentos; las cargas por m² no intervienen en las reacciones "
            "ni en el momento máximo informado (sí se dibujan en los diagramas).",
            "Curva de flecha por superposición; uniformes parciales no aportan flecha (aproximación).",
        ]
    story.extend(_bullets(base, styles))
    story.append(Spacer(1, 3 * mm))

    story.append(PageBreak())

    # ----------------- Datos del caso -----------------
    story.append(Paragraph("Datos del caso", styles["Heading2"]))
    for title, rows in (("Geometría", caso.geometria), ("Perfil", caso.perfil), ("Material", caso.material)):
        story.append(Paragraph(title, styles["Heading3"]))
        t = Table([[a, b] for a, b in rows], colWidths=[70 * mm, 110 * mm])
        t.setStyle(_kv_table_style())
        story.append(t)
        story.append(Spacer(1, 3 * mm))

    story.append(Paragraph("Cargas aplicadas", styles["Heading3"]))
    if caso.cargas:
        crows = [["#", "Carga", "Tipo", "Detalle", "F total [N]"]]
        for k, (name, kind, detail, total) in enumerate(caso.cargas, start=1):
            crows.append([str(k), name, kind, Paragraph(escape(detail), styles["Small"]), _f(total, 1)])
        t = Table(crows, colWidths=[8 * mm, 32 * mm, 24 * mm, 90 * mm, 26 * mm], repeatRows=1)
        t.setStyle(_grid_table_style(header_rows=1))
        story.append(t)
    else:
        story.append(Paragraph("(Sin cargas)", styles["Small"]))
    story.append(Spacer(1, 3 * mm))

    if caso.tramos:
        story.append(Paragraph("Tramos del bastidor", styles["Heading3"]))
        srows = [["Tramo", "Posición", "Casing + primaria [N]"]]
        srows += [[name, pos, _f(total, 1)] for name, pos, total in caso.tramos]
        t = Table(srows, colWidths=[50 * mm, 70 * mm, 60 * mm], repeatRows=1)
        t.setStyle(_grid_table_style(header_rows=1))
        story.append(t)
        story.append(Spacer(1, 3 * mm))

    # ----------------- Resultados -----------------
    story.append(Paragraph("Resultados", styles["Heading2"]))
    rrows = [
        ["Carga total aplicada [N]", _f(results.total_applied_load_N, 2)],
        ["Peso propio [N]", _f(results.self_weight_N, 2)],
        ["Cantidad de vigas", str(results.total_beams)],
        ["Carga por viga [N]", _f(results.load_per_beam_N, 2)],
        ["Corte máximo [N]", _f(results.max_shear_force_N, 2)],
        ["Momento máximo [N·m]", _f(results.max_bending_moment_Nm, 2)],
        ["Inercia I [m⁴]", f"{results.moment_of_inertia_m4:.4e}"],
        ["Módulo resistente W [m³]", f"{results.section_modulus_m3:.4e}"],
        ["Tensión normal máx. [MPa]", _f(results.max_normal_stress_MPa, 2)],
        ["Tensión de corte máx. [MPa]", _f(results.max_shear_stress_MPa, 2)],
        ["Factor de seguridad", _fs(results.safety_factor)],
        ["Flecha máxima [mm]", _f(results.max_deflection_m * 1000.0, 4)],
    ]
    t = Table(rrows, colWidths=[80 * mm, 100 * mm])
    t.setStyle(_kv_table_style())
    story.append(t)
    story.append(Spacer(1, 3 * mm))

    if caso.is_frame:
        story.append(Paragraph("Reacciones en esquinas", styles["Heading3"]))
        cr = results.corner_reactions
        rows = [
            ["R1 (arriba-izq)", "R2 (arriba-der)", "R3 (abajo-izq)", "R4 (abajo-der)"],
            [f"{_f(cr.R1, 2)} N", f"{_f(cr.R2, 2)} N", f"{_f(cr.R3, 2)} N", f"{_f(cr.R4, 2)} N"],
        ]
        t = Table(rows, colWidths=[45 * mm] * 4)
        t.setStyle(_grid_table_style(header_rows=1))
        story.append(t)
        story.append(Spacer(1, 2 * mm))
        story.append(Paragraph(f"Reacción máxima de esquina: {_f(results.corner_reaction_force_N, 2)} N", styles["Small"]))

    if results.notes:
        story.append(Paragraph("Observaciones", styles["Heading3"]))
        story.extend(_bullets(list(results.notes), styles))

    # ----------------- Figuras -----------------
    story.append(PageBreak())
    story.append(Paragraph("Figuras", styles["Heading2"]))
    if caso.is_frame:
        story.append(Paragraph("Diagramas de la viga crítica equivalente (representativos).", styles["Small"]))

    _append_figure(story, styles, "v", "Diagrama de corte V(x)", imgs, max_w=180 * mm, max_h=80 * mm)
    _append_figure(story, styles, "m", "Diagrama de momento M(x)", imgs, max_w=180 * mm, max_h=80 * mm)
    _append_figure(story, styles, "d", "Deformada δ(x)", imgs, max_w=180 * mm, max_h=80 * mm)

    doc.build(story)


# ----------------- helpers -----------------

def _normalize_images_dict(imagenes: Optional[Dict[str, str]]) -> Dict[str, str]:
    if not imagenes:
        return {}
    out: Dict[str, str] = {}
    for k, v in imagenes.items():
        kk = (k or "").strip().lower()
        vv = (v or "").strip()
        if not kk or not vv:
            continue
        out[kk] = vv
    return out


def _append_figure(story: List[object], styles, key: str, title: str, imgs: Dict[str, str], *, max_w: float, max_h: float):
    story.append(Paragraph(title, styles["Heading3"]))
    path = (imgs.get(key) or "").strip()
    if path and os.path.exists(path):
        story.append(_img(path, max_w=max_w, max_h=max_h))
    else:
        # Dejar evidencia en el PDF si no se insertó la imagen
        story.append(Paragraph(f"(Sin imagen: '{key}' no disponible o no existe en disco)", styles["Small"]))
    story.append(Spacer(1, 3 * mm))


def _f(v: float, dec: int) -> str:
    s = f"{float(v):.{dec}f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    return s


def _fs(v: float) -> str:
    return "∞" if math.isinf(v) else _f(v, 2)


def _bullets(items: List[str], styles):
    out: List[object] = []
    for it in items:
        out.append(Paragraph(f"• {escape(it)}", styles["BodyText"]))
        out.append(Spacer(1, 1.2 * mm))
    return out


def _kv_table_style():
    return TableStyle(
        [
            ("FONTNAME", (0, 0), (-1, -1), "Helvetica"),
            ("FONTSIZE", (0, 0), (-1, -1), 10),
            ("GRID", (0, 0), (-1, -1), 0.5, colors.black),
            ("BACKGROUND", (0, 0), (0, -1), colors.whitesmoke),
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ("LEFTPADDING", (0, 0), (-1, -1), 6),
            ("RIGHTPADDING", (0, 0), (-1, -1), 6),
            ("TOPPADDING", (0, 0), (-1, -1), 4),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
        ]
    )


def _grid_table_style(header_rows: int = 1, font_size: int = 9):
    ts = [
        ("FONTNAME", (0, 0), (-1, -1), "Helvetica"),
        ("FONTSIZE", (0, 0), (-1, -1), font_size),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.black),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("LEFTPADDING", (0, 0), (-1, -1), 4),
        ("RIGHTPADDING", (0, 0), (-1, -1), 4),
        ("TOPPADDING", (0, 0), (-1, -1), 3),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
    ]
    if header_rows > 0:
        ts += [
            ("BACKGROUND", (0, 0), (-1, header_rows - 1), colors.lightgrey),
            ("FONTNAME", (0, 0), (-1, header_rows - 1), "Helvetica-Bold"),
        ]
    return TableStyle(ts)


def _img(path: str, *, max_w: float, max_h: float):
    img = Image(path)
    iw, ih = img.imageWidth, img.imageHeight
    if iw <= 0 or ih <= 0:
        return img
    scale = min(max_w / iw, max_h / ih, 1.0)
    img.drawWidth = iw * scale
    img.drawHeight = ih * scale
    return img
