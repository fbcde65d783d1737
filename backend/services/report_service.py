"""
Inspection reports (informes): role-scoped listing, creation from an assignment,
the full report document, section updates, approval and deletion.

Responsibility: every multi-table write runs inside one connect() unit of work so a
report is never left half-created or half-deleted. No HTTP or FastAPI here.
"""

import logging
import math
import sqlite3
from typing import Any

from backend.core.db import connect, row_to_dict, rows_to_dicts, utc_now
from backend.core.errors import ConflictError, InvalidRequestError, NotFoundError, PermissionDeniedError
from backend.core.report_sections import PROPERTY_COLUMNS, REPORT_TYPES, SECTIONS, Section, property_values
from backend.services.directory_service import find_architect_id

logger = logging.getLogger(__name__)

APPROVAL_STATES: tuple[str, ...] = ("pendiente", "aprobado", "rechazado")

_APPROVAL_FILTERS = {
    "aprobado": "AND i.aprobado = 1",
    "rechazado": "AND i.aprobado = 0",
    "pendiente": "AND i.aprobado IS NULL",
}

_LIST_SELECT = """
    SELECT
        i.id,
        i.tipo_informe,
        i.estado,
        i.aprobado,
        CASE
            WHEN i.aprobado = 1 THEN 'aprobado'
            WHEN i.aprobado = 0 THEN 'rechazado'
            ELSE 'pendiente'
        END AS estado_aprobacion,
        i.coste_estimado_reparacion,
        i.created_at,
        i.updated_at,
        i.cliente_id,
        i.arquitecto_id,
        inm.direccion,
        inm.ref_catastral,
        inm.tipo_propiedad,
        ins.nombre AS inspector_nombre,
        ins.apellido AS inspector_apellido,
        ucli.nombre AS cliente_nombre,
        ucli.apellido AS cliente_apellido,
        uarq.nombre AS arquitecto_nombre,
        uarq.apellido AS arquitecto_apellido
    FROM informes i
    LEFT JOIN inmuebles inm ON i.inmueble_id = inm.id
    LEFT JOIN inspectores ins ON i.id = ins.informe_id
    LEFT JOIN usuarios ucli ON i.cliente_id = ucli.id
    LEFT JOIN arquitectos arq ON i.arquitecto_id = arq.id
    LEFT JOIN usuarios uarq ON arq.usuario_id = uarq.id
"""


def normalize_approval_state(value: Any) -> str | None:
    """Trimmed, lower-cased approval state, or None when it is not one of the known states."""
    if not isinstance(value, str):
        return None
    normalized = value.strip().lower()
    return normalized if normalized in APPROVAL_STATES else None


def approval_to_db(state: str | None) -> bool | None:
    if state == "aprobado":
        return True
    if state == "rechazado":
        return False
    return None


def approval_from_db(aprobado: bool | None) -> str:
    if aprobado is True:
        return "aprobado"
    if aprobado is False:
        return "rechazado"
    return "pendiente"


def _positive_id(value: Any) -> int | None:
    """Lenient id parsing for form payloads: blanks, non-numbers and non-positive values are None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number <= 0 or not number.is_integer():
        return None
    return int(number)


def _nested(payload: dict[str, Any], path: tuple[str, ...]) -> dict[str, Any] | None:
    node: Any = payload
    for key in path:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node if isinstance(node, dict) else None


def _write_section(conn: sqlite3.Connection, section: Section, report_id: int, payload: dict[str, Any]) -> None:
    """Insert the section row for a report, or overwrite it when one already exists."""
    names = section.column_names
    placeholders = ", ".join("?" for _ in range(len(names) + 1))
    updates = ", ".join(f"{name} = excluded.{name}" for name in names)
    conn.execute(
        f"""
        INSERT INTO {section.table} (informe_id, {', '.join(names)})
        VALUES ({placeholders})
        ON CONFLICT(informe_id) DO UPDATE SET {updates}
        """,
        [report_id, *section.values_from(payload)],
    )


# --- Listing ---


def list_reports(
    rol: str,
    user_id: int,
    email: str | None = None,
    cliente_id: int | None = None,
    arquitecto_id: int | None = None,
    estado_aprobacion: str | None = None,
) -> list[dict[str, Any]]:
    """
    Reports visible to the caller.

    gestor: filters apply as given. cliente: own reports, approved only.
    arquitecto: own reports; client and approval filters still apply.

    Raises:
        PermissionDeniedError: filtering on someone else's id, or an unsupported role.
    """
    estado = normalize_approval_state(estado_aprobacion)
    if rol == "gestor":
        pass
    elif rol == "cliente":
        if cliente_id and cliente_id != user_id:
            raise PermissionDeniedError()
        cliente_id = user_id
        arquitecto_id = None
        estado = "aprobado"
    elif rol == "arquitecto":
        own_id = find_architect_id(user_id, email)
        if own_id is None:
            logger.info("[report_service:list_reports] OUT no architect record user_id=%s", user_id)
            return []
        if arquitecto_id and arquitecto_id != own_id:
            raise PermissionDeniedError()
        arquitecto_id = own_id
    else:
        raise PermissionDeniedError("Rol no soportado")

    clauses: list[str] = []
    params: list[Any] = []
    if cliente_id is not None:
        clauses.append("AND i.cliente_id = ?")
        params.append(cliente_id)
    if arquitecto_id is not None:
        clauses.append("AND i.arquitecto_id = ?")
        params.append(arquitecto_id)
    if estado:
        clauses.append(_APPROVAL_FILTERS[estado])

    with connect() as conn:
        rows = conn.execute(
            f"{_LIST_SELECT} WHERE 1=1 {' '.join(clauses)} ORDER BY i.created_at DESC, i.id DESC",
            params,
        ).fetchall()
    reports = rows_to_dicts(rows)
    logger.info(
        "[report_service:list_reports] IN  rol=%s cliente_id=%s arquitecto_id=%s estado=%s OUT count=%d",
        rol,
        cliente_id,
        arquitecto_id,
        estado,
        len(reports),
    )
    return reports


# --- Creation ---


def create_report(
    rol: str,
    user_id: int,
    tipo: str | None,
    data: dict[str, Any] | None,
    email: str | None = None,
    cliente_id: Any = None,
    asignacion_id: Any = None,
    arquitecto_id: Any = None,
    estado_aprobacion: Any = None,
) -> int:
    """
    Create the property, the report and every section the report type carries.

    Client and architect come from the request, then the assignment. Only a
    non-architect caller may fall back to data["informes"].
    An architect always reports as themselves and only on their own assignments.
    Only a gestor may choose the initial approval state.

    Returns:
        The new report id.

    Raises:
        InvalidRequestError: bad type, or the client/architect cannot be resolved.
        NotFoundError: the assignment does not exist.
        ConflictError: the assignment already has a report.
        PermissionDeniedError: the architect has no record or the assignment is someone else's.
    """
    if not tipo or tipo not in REPORT_TYPES:
        raise InvalidRequestError("Tipo de informe inválido")
    data = data or {}
    informe_data = data.get("informes") if isinstance(data.get("informes"), dict) else {}

    resolved_cliente = _positive_id(cliente_id)
    resolved_arquitecto = _positive_id(arquitecto_id)
    requested_approval = normalize_approval_state(
        estado_aprobacion if estado_aprobacion is not None else informe_data.get("estado_aprobacion")
    )
    assignment_key = _positive_id(asignacion_id)

    try:
        with connect() as conn:
            assignment = None
            if assignment_key is not None:
                assignment = conn.execute(
                    """
                    SELECT a.id, a.cliente_id, a.arquitecto_id, a.informe_id,
                           arq.usuario_id AS arquitecto_usuario_id
                    FROM asignaciones a
                    LEFT JOIN arquitectos arq ON a.arquitecto_id = arq.id
                    WHERE a.id = ?
                    """,
                    (assignment_key,),
                ).fetchone()
                if assignment is None:
                    raise NotFoundError("Asignación no encontrada")
                if assignment["informe_id"]:
                    raise ConflictError("La asignación ya tiene un informe asociado")
                if resolved_cliente is None:
                    resolved_cliente = assignment["cliente_id"]
                if resolved_arquitecto is None:
                    resolved_arquitecto = assignment["arquitecto_id"]

            if rol == "arquitecto":
                own_id = find_architect_id(user_id, email)
                if own_id is None:
                    raise PermissionDeniedError("Arquitecto no encontrado para el usuario")
                if assignment is not None and assignment["arquitecto_id"] is not None:
                    matches = assignment["arquitecto_id"] == own_id or assignment["arquitecto_usuario_id"] == user_id
                    if not matches:
                        raise PermissionDeniedError("No puedes crear informes para esta asignación")
                resolved_arquitecto = own_id
                if resolved_cliente is None:
                    raise InvalidRequestError("Falta el cliente asociado al informe")
            else:
                if resolved_cliente is None:
                    resolved_cliente = _positive_id(informe_data.get("cliente_id"))
                if resolved_arquitecto is None:
                    resolved_arquitecto = _positive_id(informe_data.get("arquitecto_id"))

            if resolved_cliente is None:
                raise InvalidRequestError("Debes indicar el cliente del informe")
            if resolved_arquitecto is None:
                raise InvalidRequestError("Debes indicar el arquitecto responsable")

            approval = requested_approval if rol == "gestor" and requested_approval else "pendiente"
            now = utc_now()

            inmueble_data = data.get("inmuebles") if isinstance(data.get("inmuebles"), dict) else {}
            property_cols = ", ".join(name for name, _ in PROPERTY_COLUMNS)
            property_marks = ", ".join("?" for _ in PROPERTY_COLUMNS)
            inmueble_id = conn.execute(
                f"INSERT INTO inmuebles ({property_cols}) VALUES ({property_marks})",
                property_values(inmueble_data),
            ).lastrowid

            report_id = conn.execute(
                """
                INSERT INTO informes (
                    inmueble_id, cliente_id, arquitecto_id, tipo_informe, estado, aprobado,
                    coste_estimado_reparacion, resumen_ejecutivo_texto, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    inmueble_id,
                    resolved_cliente,
                    resolved_arquitecto,
                    tipo,
                    informe_data.get("estado") or "borrador",
                    approval_to_db(approval),
                    informe_data.get("coste_estimado_reparacion") or 0,
                    informe_data.get("resumen_ejecutivo_texto") or "",
                    now,
                    now,
                ),
            ).lastrowid

            if assignment is not None:
                conn.execute(
                    """
                    UPDATE asignaciones
                    SET informe_id = ?, creado = 1, arquitecto_id = ?, updated_at = ?
                    WHERE id = ?
                    """,
                    (report_id, resolved_arquitecto, now, assignment["id"]),
                )

            written = 0
            for section in SECTIONS:
                if not section.applies_to(tipo):
                    continue
                payload = data.get(section.create_key)
                if isinstance(payload, dict):
                    _write_section(conn, section, report_id, payload)
                    written += 1
    except sqlite3.IntegrityError as e:
        raise InvalidRequestError("El cliente o el arquitecto del informe no existen") from e

    logger.info(
        "[report_service:create_report] OUT id=%s tipo=%s rol=%s asignacion_id=%s sections=%d approval=%s",
        report_id,
        tipo,
        rol,
        assignment_key,
        written,
        approval,
    )
    return report_id


# --- Full document ---


def get_report(report_id: int) -> dict[str, Any] | None:
    """The complete report document; sections that were never filled are None."""
    with connect() as conn:
        informe = row_to_dict(conn.execute("SELECT * FROM informes WHERE id = ?", (report_id,)).fetchone())
        if informe is None:
            return None
        informe["estado_aprobacion"] = approval_from_db(informe["aprobado"])
        inmueble = row_to_dict(
            conn.execute("SELECT * FROM inmuebles WHERE id = ?", (informe["inmueble_id"],)).fetchone()
        )
        document: dict[str, Any] = {"informe": informe, "inmueble": inmueble}
        for section in SECTIONS:
            row = conn.execute(f"SELECT * FROM {section.table} WHERE informe_id = ?", (report_id,)).fetchone()
            *parents, leaf = section.read_path
            node = document
            for key in parents:
                node = node.setdefault(key, {})
            node[leaf] = row_to_dict(row)
    logger.info("[report_service:get_report] OUT id=%s tipo=%s", report_id, informe["tipo_informe"])
    return document


# --- Updates ---


def update_report(report_id: int, rol: str, data: dict[str, Any] | None) -> None:
    """
    Apply an edit: property, report header and any section present in the body.

    A gestor may set informe.estado_aprobacion; any edit by an arquitecto sends the
    report back to pendiente.

    Raises:
        NotFoundError: no such report.
    """
    data = data or {}
    approval_override: str | None = None
    updated: list[str] = []
    with connect() as conn:
        informe = conn.execute("SELECT id, inmueble_id FROM informes WHERE id = ?", (report_id,)).fetchone()
        if informe is None:
            raise NotFoundError("Informe no encontrado")
        now = utc_now()

        inmueble_data = data.get("inmueble")
        if isinstance(inmueble_data, dict):
            assignments = ", ".join(f"{name} = ?" for name, _ in PROPERTY_COLUMNS)
            conn.execute(
                f"UPDATE inmuebles SET {assignments} WHERE id = ?",
                [*property_values(inmueble_data), informe["inmueble_id"]],
            )
            updated.append("inmueble")

        informe_data = data.get("informe")
        if isinstance(informe_data, dict):
            desired = normalize_approval_state(informe_data.get("estado_aprobacion"))
            if rol == "gestor" and desired:
                approval_override = desired
            conn.execute(
                """
                UPDATE informes SET
                    estado = COALESCE(?, estado),
                    resumen_ejecutivo_texto = ?,
                    coste_estimado_reparacion = ?,
                    updated_at = ?
                WHERE id = ?
                """,
                (
                    informe_data.get("estado"),
                    informe_data.get("resumen_ejecutivo_texto") or None,
                    informe_data.get("coste_estimado_reparacion"),
                    now,
                    report_id,
                ),
            )
            updated.append("informe")

        for section in SECTIONS:
            payload = _nested(data, section.update_path)
            if payload is not None:
                _write_section(conn, section, report_id, payload)
                updated.append(section.table)

        if rol == "arquitecto":
            approval_override = "pendiente"
        if approval_override:
            conn.execute(
                "UPDATE informes SET aprobado = ?, updated_at = ? WHERE id = ?",
                (approval_to_db(approval_override), now, report_id),
            )
    logger.info(
        "[report_service:update_report] OUT id=%s rol=%s parts=%d approval=%s",
        report_id,
        rol,
        len(updated),
        approval_override,
    )


def set_approval(report_id: int, estado_aprobacion: Any) -> str:
    """
    Set the approval state of a report.

    Raises:
        InvalidRequestError: unknown state.
        NotFoundError: no such report.
    """
    desired = normalize_approval_state(estado_aprobacion)
    if desired is None:
        raise InvalidRequestError("Estado de aprobación inválido. Usa pendiente, aprobado o rechazado.")
    with connect() as conn:
        cur = conn.execute(
            "UPDATE informes SET aprobado = ?, updated_at = ? WHERE id = ?",
            (approval_to_db(desired), utc_now(), report_id),
        )
        if cur.rowcount == 0:
            raise NotFoundError("Informe no encontrado")
    logger.info("[report_service:set_approval] OUT id=%s estado=%s", report_id, desired)
    return desired


# --- Deletion ---


def delete_report(report_id: int) -> None:
    """
    Delete a report with its sections and property, and unlink its assignment.

    Raises:
        NotFoundError: no such report.
    """
    with connect() as conn:
        informe = conn.execute("SELECT inmueble_id FROM informes WHERE id = ?", (report_id,)).fetchone()
        if informe is None:
            raise NotFoundError("Informe no encontrado")
        conn.execute(
            "UPDATE asignaciones SET informe_id = NULL, creado = 0, updated_at = ? WHERE informe_id = ?",
            (utc_now(), report_id),
        )
        for section in SECTIONS:
            conn.execute(f"DELETE FROM {section.table} WHERE informe_id = ?", (report_id,))
        conn.execute("DELETE FROM informes WHERE id = ?", (report_id,))
        if informe["inmueble_id"]:
            conn.execute("DELETE FROM inmuebles WHERE id = ?", (informe["inmueble_id"],))
    logger.info("[report_service:delete_report] OUT id=%s", report_id)
