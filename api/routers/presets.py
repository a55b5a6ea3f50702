"""Presets API router.

Saved search presets and per-context default selections, stored in a local
SQLite database. Presets are pooled per artifact type; defaults are kept per
browsing context.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from datetime import datetime, timezone
import uuid
import json
import sqlite3

from api.config import get_settings
from api.models.schemas import DefaultUpdate, PresetCreate, PresetResponse
from config.constants import ARTIFACT_TYPES, VALID_CONTEXTS, artifact_type_for_context
from config.logging_config import get_logger

router = APIRouter()
logger = get_logger("api.presets")


def _ensure_schema(conn: sqlite3.Connection) -> None:
    conn.execute("""
        CREATE TABLE IF NOT EXISTS presets (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            artifact_type TEXT NOT NULL,
            context TEXT NOT NULL,
            filters TEXT NOT NULL,
            sort TEXT NOT NULL,
            direction TEXT NOT NULL,
            view_mode TEXT,
            zoom_level TEXT,
            grid_density TEXT,
            table_columns TEXT,
            per_page INTEGER,
            created_at TEXT NOT NULL
        )
    """)
    conn.execute("""
        CREATE TABLE IF NOT EXISTS default_presets (
            context TEXT PRIMARY KEY,
            preset_id TEXT NOT NULL
        )
    """)
    conn.commit()


def get_presets_db():
    """Yield a connection to the presets database, creating it if needed."""
    db_path = get_settings().presets_db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)
    # Dependencies and endpoints may run on different threads
    conn = sqlite3.connect(str(db_path), check_same_thread=False)
    conn.row_factory = sqlite3.Row
    _ensure_schema(conn)
    try:
        yield conn
    finally:
        conn.close()


def _row_to_preset(row: sqlite3.Row) -> dict:
    table_columns = row["table_columns"]
    return {
        "id": row["id"],
        "name": row["name"],
        "artifact_type": row["artifact_type"],
        "context": row["context"],
        "filters": json.loads(row["filters"]),
        "sort": row["sort"],
        "direction": row["direction"],
        "view_mode": row["view_mode"],
        "zoom_level": row["zoom_level"],
        "grid_density": row["grid_density"],
        "table_columns": json.loads(table_columns) if table_columns is not None else None,
        "per_page": row["per_page"],
        "created_at": row["created_at"],
    }


def _validate_artifact_type(artifact_type: str) -> None:
    if artifact_type not in ARTIFACT_TYPES:
        raise HTTPException(status_code=400, detail=f"Unknown artifact type: {artifact_type}")


def _validate_context(context: str) -> None:
    if context not in VALID_CONTEXTS:
        raise HTTPException(status_code=400, detail=f"Unknown context: {context}")


# =============================================================================
# Presets
# =============================================================================

@router.get("/presets", response_model=list[PresetResponse])
async def list_presets(
    artifact_type: str = Query(..., alias="type", description="Artifact type to list presets for"),
    conn: sqlite3.Connection = Depends(get_presets_db),
):
    """List the saved presets of one artifact type, oldest first."""
    _validate_artifact_type(artifact_type)
    cursor = conn.execute(
        "SELECT * FROM presets WHERE artifact_type = ? ORDER BY created_at, rowid",
        [artifact_type],
    )
    return [_row_to_preset(row) for row in cursor.fetchall()]


@router.post("/presets", status_code=201, response_model=PresetResponse)
async def create_preset(
    request: PresetCreate,
    conn: sqlite3.Connection = Depends(get_presets_db),
):
    """Create a new preset."""
    name = request.name.strip()
    if not name:
        raise HTTPException(status_code=400, detail="Preset name is required")
    _validate_artifact_type(request.artifact_type)
    _validate_context(request.context)
    if artifact_type_for_context(request.context) != request.artifact_type:
        raise HTTPException(
            status_code=400,
            detail=f"Context {request.context} does not store {request.artifact_type} presets",
        )

    preset_id = str(uuid.uuid4())
    now = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
    conn.execute(
        """
        INSERT INTO presets (
            id, name, artifact_type, context, filters, sort, direction,
            view_mode, zoom_level, grid_density, table_columns, per_page, created_at
        )
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        [
            preset_id,
            name,
            request.artifact_type,
            request.context,
            json.dumps(request.filters),
            request.sort,
            request.direction,
            request.view_mode,
            request.zoom_level,
            request.grid_density,
            json.dumps(request.table_columns) if request.table_columns is not None else None,
            request.per_page,
            now,
        ],
    )
    conn.commit()
    logger.info(f"Created {request.artifact_type} preset '{name}' ({preset_id})")

    return {**request.model_dump(), "name": name, "id": preset_id, "created_at": now}


@router.delete("/presets/{artifact_type}/{preset_id}", status_code=204)
async def delete_preset(
    artifact_type: str,
    preset_id: str,
    conn: sqlite3.Connection = Depends(get_presets_db),
):
    """Delete a preset and clear any default selection pointing at it."""
    _validate_artifact_type(artifact_type)
    cursor = conn.execute(
        "DELETE FROM presets WHERE id = ? AND artifact_type = ?",
        [preset_id, artifact_type],
    )
    if cursor.rowcount == 0:
        conn.rollback()
        raise HTTPException(status_code=404, detail="Preset not found")

    conn.execute("DELETE FROM default_presets WHERE preset_id = ?", [preset_id])
    conn.commit()
    return Response(status_code=204)


# =============================================================================
# Default selections
# =============================================================================

def _defaults_map(conn: sqlite3.Connection) -> dict[str, str]:
    cursor = conn.execute("SELECT context, preset_id FROM default_presets ORDER BY context")
    return {row["context"]: row["preset_id"] for row in cursor.fetchall()}


@router.get("/defaults")
async def get_defaults(conn: sqlite3.Connection = Depends(get_presets_db)):
    """Get the default preset id of every context that has one."""
    return _defaults_map(conn)


@router.put("/defaults")
async def set_default(
    request: DefaultUpdate,
    conn: sqlite3.Connection = Depends(get_presets_db),
):
    """Set or clear one context's default preset. Returns the full default map."""
    _validate_context(request.context)

    if request.preset_id is None:
        conn.execute("DELETE FROM default_presets WHERE context = ?", [request.context])
    else:
        row = conn.execute(
            "SELECT artifact_type FROM presets WHERE id = ?", [request.preset_id]
        ).fetchone()
        if row is None:
            raise HTTPException(status_code=404, detail="Preset not found")
        if row["artifact_type"] != artifact_type_for_context(request.context):
            raise HTTPException(
                status_code=400,
                detail=f"A {row['artifact_type']} preset cannot be the default for {request.context}",
            )
        conn.execute(
            """
            INSERT INTO default_presets (context, preset_id) VALUES (?, ?)
            ON CONFLICT(context) DO UPDATE SET preset_id = excluded.preset_id
            """,
            [request.context, request.preset_id],
        )
    conn.commit()
    return _defaults_map(conn)
