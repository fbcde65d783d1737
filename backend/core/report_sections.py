"""
Inspection report layout: the property columns and every per-report section table.

Each section is one table keyed by informe_id (one row per report). The catalogue
drives DDL in db.init_db and the create/read/update/delete paths in report_service,
so adding a column means editing this file only.
"""

import json
from dataclasses import dataclass
from typing import Any

# Column kinds
TEXT = "text"      # empty values stored as NULL
NUMBER = "number"  # zero/empty stored as NULL
FLAG = "flag"      # stored as a boolean, missing means False
COUNT = "count"    # missing means 0
PHOTOS = "photos"  # list of photo URLs stored as JSON, empty means NULL

_SQL_TYPES = {
    TEXT: "TEXT",
    NUMBER: "NUMERIC",
    FLAG: "BOOLEAN NOT NULL DEFAULT 0",
    COUNT: "INTEGER NOT NULL DEFAULT 0",
    PHOTOS: "JSON",
}

REPORT_TYPES: tuple[str, ...] = ("basico", "tecnico", "documental")

# Section tier -> report types that carry it
_TIER_TYPES: dict[str, frozenset[str]] = {
    "basico": frozenset({"basico", "tecnico", "documental"}),
    "tecnico": frozenset({"tecnico", "documental"}),
    "documental": frozenset({"documental"}),
}


def coerce(kind: str, value: Any) -> Any:
    """Normalize a submitted value for storage according to its column kind."""
    if kind == FLAG:
        return bool(value)
    if kind == COUNT:
        return value or 0
    if kind == PHOTOS:
        return json.dumps(value) if value else None
    return value or None


@dataclass(frozen=True)
class Section:
    """
    One report section table.

    create_key: key under `data` in POST /api/informes.
    read_path: location in the GET /api/informes/{id} document.
    update_path: location in the PUT /api/informes/{id} body.
    """

    table: str
    tier: str
    columns: tuple[tuple[str, str], ...]
    create_key: str
    read_path: tuple[str, ...]
    update_path: tuple[str, ...]

    @property
    def column_names(self) -> list[str]:
        return [name for name, _ in self.columns]

    def applies_to(self, report_type: str) -> bool:
        return report_type in _TIER_TYPES[self.tier]

    def values_from(self, payload: dict[str, Any]) -> list[Any]:
        return [coerce(kind, payload.get(name)) for name, kind in self.columns]

    def ddl(self) -> str:
        cols = ",\n    ".join(f"{name} {_SQL_TYPES[kind]}" for name, kind in self.columns)
        return (
            f"CREATE TABLE IF NOT EXISTS {self.table} (\n"
            "    id INTEGER PRIMARY KEY AUTOINCREMENT,\n"
            "    informe_id INTEGER NOT NULL UNIQUE REFERENCES informes(id) ON DELETE CASCADE,\n"
            f"    {cols}\n"
            ")"
        )


def _section(
    table: str,
    tier: str,
    columns: list[tuple[str, str]],
    read_path: tuple[str, ...] | None = None,
    update_path: tuple[str, ...] | None = None,
    create_key: str | None = None,
) -> Section:
    read_path = read_path or (table,)
    return Section(
        table=table,
        tier=tier,
        columns=tuple(columns),
        create_key=create_key or table,
        read_path=read_path,
        update_path=update_path or read_path,
    )


PROPERTY_COLUMNS: tuple[tuple[str, str], ...] = (
    ("direccion", TEXT),
    ("ref_catastral", TEXT),
    ("anno_construccion", NUMBER),
    ("metros_cuadrados", NUMBER),
    ("orientacion", TEXT),
    ("parcela", TEXT),
    ("tipo_propiedad", TEXT),
    ("planta", TEXT),
    ("ampliado_reformado", FLAG),
    ("cambio_uso", FLAG),
    ("ventilacion_cruzada", TEXT),
    ("ventilacion_general", TEXT),
    ("iluminacion", TEXT),
    ("fotos", PHOTOS),
)

SECTIONS: tuple[Section, ...] = (
    # --- basic sections (every report) ---
    _section(
        "inspectores",
        "basico",
        [
            ("nombre", TEXT),
            ("apellido", TEXT),
            ("fecha_inspeccion", TEXT),
            ("contacto", TEXT),
            ("titulacion", TEXT),
            ("num_colegiado", TEXT),
            ("declaracion_firma_texto", TEXT),
        ],
        read_path=("inspector",),
    ),
    _section(
        "servicios_inmueble",
        "basico",
        [
            ("agua", FLAG),
            ("gas", FLAG),
            ("electricidad", FLAG),
            ("internet", FLAG),
            ("gasoil", FLAG),
            ("renovables", FLAG),
        ],
        read_path=("servicios",),
    ),
    _section(
        "condiciones_inspeccion",
        "basico",
        [
            ("temp_ambiente", TEXT),
            ("lluvia_ultimos_3d", FLAG),
            ("tiempo_atmosferico", TEXT),
            ("zona_ruidosa", FLAG),
            ("sup_exterior", TEXT),
            ("trafico", TEXT),
        ],
        read_path=("condiciones",),
        update_path=("condiciones_inspeccion",),
    ),
    _section(
        "informacion_general",
        "basico",
        [
            ("puerta_entrada_estado", TEXT),
            ("patio_luces_estado", TEXT),
            ("patio_ventilacion_estado", TEXT),
            ("ascensor_estado", TEXT),
            ("vestibulo_estado", TEXT),
            ("fachadas_estado", TEXT),
            ("jardines_estado", TEXT),
            ("posib_ascensor", FLAG),
            ("descripcion_general_texto", TEXT),
            ("fotos", PHOTOS),
        ],
    ),
    # --- structure ---
    _section(
        "estructura_vertical",
        "tecnico",
        [
            ("tipo_estructura_vertical", TEXT),
            ("tipo_muros_carga", TEXT),
            ("patologias_estructura_vertical", TEXT),
            ("fotos", PHOTOS),
        ],
        read_path=("estructura", "vertical"),
    ),
    _section(
        "estructura_horizontal",
        "tecnico",
        [
            ("tipo_vigas", TEXT),
            ("patologias_vigas", TEXT),
            ("tipo_viguetas", TEXT),
            ("patologias_viguetas", TEXT),
            ("fotos", PHOTOS),
        ],
        read_path=("estructura", "horizontal"),
    ),
    _section(
        "forjados",
        "tecnico",
        [("tiene_desniveles", FLAG), ("patologias_forjados", TEXT)],
        read_path=("estructura", "forjados"),
    ),
    _section(
        "soleras_losas",
        "tecnico",
        [
            ("tiene_soleras", FLAG),
            ("tiene_capilaridades", FLAG),
            ("desniveles", FLAG),
            ("patologias_soleras_losas", TEXT),
        ],
        read_path=("estructura", "soleras_losas"),
    ),
    _section(
        "voladizos",
        "tecnico",
        [("patologias_voladizos", TEXT)],
        read_path=("estructura", "voladizos"),
    ),
    _section(
        "cubiertas",
        "tecnico",
        [
            ("tipo_cubierta", TEXT),
            ("subtipo", TEXT),
            ("acabado", TEXT),
            ("cubierta_ventilada", FLAG),
            ("tiene_aislamiento", FLAG),
            ("aislamiento_estado_texto", TEXT),
            ("impermeabilizacion", FLAG),
            ("impermeabilizacion_estado_texto", TEXT),
            ("fotos", PHOTOS),
        ],
        read_path=("estructura", "cubiertas"),
    ),
    _section(
        "carpinterias",
        "tecnico",
        [
            ("material_carpinteria", TEXT),
            ("rotura_puente_termico", FLAG),
            ("aislamiento_termico_ventanas_estado", TEXT),
            ("aislamiento_acustico_ventanas_estado", TEXT),
            ("cristales_con_camara_estado", TEXT),
            ("sistema_oscurecimiento", TEXT),
            ("puentes_termicos_persiana", FLAG),
            ("material_persianas", TEXT),
            ("recogida_persianas", TEXT),
            ("caja_persianas", TEXT),
            ("tapa_cajon_persianas", TEXT),
            ("fotos", PHOTOS),
        ],
        read_path=("estructura", "carpinterias"),
    ),
    # --- installations ---
    _section(
        "instalacion_electrica",
        "tecnico",
        [
            ("tiene_instalacion", FLAG),
            ("cuadro_en_norma", FLAG),
            ("canalizaciones", TEXT),
            ("cajas_empalme_estado", TEXT),
            ("cableado_exterior", TEXT),
            ("cableado_interior", TEXT),
            ("toma_tierra", FLAG),
            ("energias_renovables", FLAG),
            ("observaciones_texto", TEXT),
            ("fotos", PHOTOS),
        ],
        read_path=("instalaciones", "electrica"),
    ),
    _section(
        "instalacion_agua_acs",
        "tecnico",
        [
            ("dispone_acs", FLAG),
            ("tipo_acs", TEXT),
            ("sistema_normativa", FLAG),
            ("extraccion_acs", TEXT),
            ("llave_paso_general", FLAG),
            ("llave_paso_estado", TEXT),
            ("tuberias_empotradas", FLAG),
            ("material_tuberias", TEXT),
            ("bajantes", TEXT),
            ("arquetas", TEXT),
            ("observaciones_texto", TEXT),
            ("fotos", PHOTOS),
        ],
        read_path=("instalaciones", "agua_acs"),
    ),
    _section(
        "calefaccion",
        "tecnico",
        [
            ("dispone_calefaccion", FLAG),
            ("tipo_calefaccion", TEXT),
            ("sistema_normativa", FLAG),
            ("estado_caldera", TEXT),
            ("tuberias_calefaccion", TEXT),
            ("tuberias_empotradas", FLAG),
            ("tipo_emisor", TEXT),
            ("extraccion_calefaccion", TEXT),
            ("observaciones_texto", TEXT),
            ("fotos", PHOTOS),
        ],
        read_path=("instalaciones", "calefaccion"),
    ),
    _section(
        "climatizacion",
        "tecnico",
        [("dispone_climatizacion", FLAG)],
        read_path=("instalaciones", "climatizacion"),
    ),
    _section(
        "jardin",
        "tecnico",
        [
            ("descripcion_corta", TEXT),
            ("puerta_parcela", TEXT),
            ("valla_perimetral", TEXT),
            ("cesped", TEXT),
            ("arboles", TEXT),
            ("zona_pavimentada", TEXT),
            ("tarimas_madera", TEXT),
            ("pergola_porche", TEXT),
            ("piscina", TEXT),
            ("zona_barbacoa", TEXT),
            ("zona_ducha", TEXT),
            ("banos_exteriores", TEXT),
            ("iluminacion_exterior", TEXT),
            ("riego_automatico", TEXT),
            ("pozo", TEXT),
            ("deposito_agua", TEXT),
            ("camaras_seguridad", TEXT),
            ("fachada_texto", TEXT),
            ("observaciones_texto", TEXT),
            ("fotos", PHOTOS),
        ],
    ),
    # --- rooms: read under "estructura", written from top-level keys ---
    _section(
        "estancias_salon",
        "tecnico",
        [
            ("estado_general", TEXT),
            ("pavimento", TEXT),
            ("paredes_techos", TEXT),
            ("ventanas_carpinteria", TEXT),
            ("ventilacion_natural", FLAG),
            ("iluminacion_natural", FLAG),
            ("observaciones_texto", TEXT),
        ],
        read_path=("estructura", "estancias_salon"),
        update_path=("estancias_salon",),
    ),
    _section(
        "estancias_cocina",
        "tecnico",
        [
            ("estado_general", TEXT),
            ("encimera_mobiliario", TEXT),
            ("campana_extractora", TEXT),
            ("elec_adecuada", FLAG),
            ("salida_humos", FLAG),
            ("ventilacion_natural", FLAG),
            ("griferia_fregadero", TEXT),
            ("revestimientos", TEXT),
            ("observaciones_texto", TEXT),
        ],
        read_path=("estructura", "estancias_cocina"),
        update_path=("estancias_cocina",),
    ),
    _section(
        "estancias_dormitorio",
        "tecnico",
        [
            ("estado_general", TEXT),
            ("pavimento", TEXT),
            ("paredes_techos", TEXT),
            ("ventanas_aislamiento", TEXT),
            ("ventilacion_natural", FLAG),
            ("iluminacion_natural", FLAG),
            ("humedades", FLAG),
            ("observaciones_texto", TEXT),
        ],
        read_path=("estructura", "estancias_dormitorio"),
        update_path=("estancias_dormitorio",),
    ),
    _section(
        "estancias_bano",
        "tecnico",
        [
            ("estado_general", TEXT),
            ("revestimientos", TEXT),
            ("fontaneria_sanitarios", TEXT),
            ("ventilacion", TEXT),
            ("humedades_filtraciones", FLAG),
            ("elec_adecuada", FLAG),
            ("observaciones_texto", TEXT),
        ],
        read_path=("estructura", "estancias_bano"),
        update_path=("estancias_bano",),
    ),
    _section(
        "estancias_terraza",
        "tecnico",
        [
            ("tipo_terraza", TEXT),
            ("pavimento_exterior", TEXT),
            ("barandilla_estado", TEXT),
            ("impermeabilizacion", FLAG),
            ("grietas_fisuras", FLAG),
            ("observaciones_texto", TEXT),
        ],
        read_path=("estructura", "estancias_terraza"),
        update_path=("estancias_terraza",),
    ),
    _section(
        "estancias_garaje",
        "tecnico",
        [
            ("estado_general", TEXT),
            ("pavimento", TEXT),
            ("paredes_techos", TEXT),
            ("ventilacion", FLAG),
            ("iluminacion", FLAG),
            ("puerta_modo", TEXT),
            ("filtraciones", FLAG),
            ("observaciones_texto", TEXT),
        ],
        read_path=("estructura", "estancias_garaje"),
        update_path=("estancias_garaje",),
    ),
    _section(
        "estancias_sotano",
        "tecnico",
        [
            ("estado_general", TEXT),
            ("humedad", FLAG),
            ("ventilacion", FLAG),
            ("iluminacion", FLAG),
            ("revestimientos", TEXT),
            ("uso_actual", TEXT),
            ("observaciones_texto", TEXT),
        ],
        read_path=("estructura", "estancias_sotano"),
        update_path=("estancias_sotano",),
    ),
    # --- documentary extras ---
    _section(
        "eficiencia",
        "documental",
        [
            ("notas_texto", TEXT),
            ("certificado_energetico", TEXT),
            ("calificacion_energetica", TEXT),
            ("consumo_anual_estimado", NUMBER),
        ],
    ),
    _section(
        "siguientes_pasos",
        "documental",
        [
            ("obtener_presupuestos_texto", TEXT),
            ("estudios_complementarios_texto", TEXT),
            ("descripcion_servicio_texto", TEXT),
            ("consejos_antes_comprar_texto", TEXT),
            ("consejos_mantenimiento_texto", TEXT),
        ],
    ),
    _section(
        "resumen_inspeccion_metricas",
        "documental",
        [
            ("puntos_inspeccionados", COUNT),
            ("puntos_no_inspeccionados", COUNT),
            ("necesitan_reparacion", COUNT),
            ("no_necesitan_reparacion", COUNT),
            ("defectos_graves", COUNT),
        ],
    ),
)


def property_ddl() -> str:
    cols = ",\n    ".join(f"{name} {_SQL_TYPES[kind]}" for name, kind in PROPERTY_COLUMNS)
    return (
        "CREATE TABLE IF NOT EXISTS inmuebles (\n"
        "    id INTEGER PRIMARY KEY AUTOINCREMENT,\n"
        f"    {cols}\n"
        ")"
    )


def property_values(payload: dict[str, Any]) -> list[Any]:
    return [coerce(kind, payload.get(name)) for name, kind in PROPERTY_COLUMNS]
