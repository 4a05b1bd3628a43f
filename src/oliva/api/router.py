"""HTTP endpoints for editing open notebooks.

Every edit goes through NotebookService.apply, which holds the notebook's
lock for the duration of the operation.
"""

from dataclasses import asdict

from fastapi import APIRouter, Depends, Request, Response

from oliva.api.schemas import (
    ChangePaperRequest,
    CreateNotebookRequest,
    MovePageRequest,
    RelocateCellRequest,
    ReorderCellRequest,
    ResizeCellRequest,
    UpdateCellRequest,
)
from oliva.models.page import SectionKind
from oliva.notebook import operations
from oliva.service import NotebookService, get_notebook_service

router = APIRouter(prefix="/notebooks", tags=["notebooks"])


@router.post("", status_code=201)
async def create_notebook(
    body: CreateNotebookRequest,
    service: NotebookService = Depends(get_notebook_service),
) -> dict:
    options = body.model_dump(exclude={"id", "author_name"}, exclude_none=True)
    notebook = service.create(body.author_name, notebook_id=body.id, **options)
    return await service.snapshot(notebook.id)


@router.get("")
async def list_notebooks(service: NotebookService = Depends(get_notebook_service)) -> dict:
    return {"notebooks": service.list_ids()}


@router.post("/import", status_code=201)
async def import_notebook(
    request: Request,
    service: NotebookService = Depends(get_notebook_service),
) -> dict:
    """Open a notebook from a serialized JSON document in the request body."""
    notebook = service.import_string(await request.body())
    return await service.snapshot(notebook.id)


@router.get("/{notebook_id}")
async def get_notebook(
    notebook_id: str, service: NotebookService = Depends(get_notebook_service)
) -> dict:
    return await service.snapshot(notebook_id)


@router.delete("/{notebook_id}", status_code=204)
async def close_notebook(
    notebook_id: str, service: NotebookService = Depends(get_notebook_service)
) -> Response:
    await service.close(notebook_id)
    return Response(status_code=204)


@router.post("/{notebook_id}/save")
async def save_notebook(
    notebook_id: str, service: NotebookService = Depends(get_notebook_service)
) -> dict:
    path = await service.save(notebook_id)
    return {"path": str(path)}


# -- Pages --


@router.post("/{notebook_id}/pages", status_code=201)
async def add_page(
    notebook_id: str, service: NotebookService = Depends(get_notebook_service)
) -> dict:
    page = await service.apply(notebook_id, operations.add_page)
    return page.model_dump(mode="json")


@router.post("/{notebook_id}/pages/move")
async def move_page(
    notebook_id: str,
    body: MovePageRequest,
    service: NotebookService = Depends(get_notebook_service),
) -> dict:
    await service.apply(notebook_id, operations.move_page, body.old_index, body.new_index)
    return await service.snapshot(notebook_id)


@router.delete("/{notebook_id}/pages/{page_index}")
async def delete_page(
    notebook_id: str, page_index: int, service: NotebookService = Depends(get_notebook_service)
) -> dict:
    page = await service.apply(notebook_id, operations.delete_page, page_index)
    return {"deleted": page.id}


# -- Cells --


@router.post("/{notebook_id}/pages/{page_index}/{section}/cells", status_code=201)
async def add_cell(
    notebook_id: str,
    page_index: int,
    section: SectionKind,
    service: NotebookService = Depends(get_notebook_service),
) -> dict:
    cell = await service.apply(notebook_id, operations.add_cell, page_index, section)
    return cell.model_dump(mode="json")


@router.post("/{notebook_id}/pages/{page_index}/{section}/cells/reorder")
async def reorder_cell(
    notebook_id: str,
    page_index: int,
    section: SectionKind,
    body: ReorderCellRequest,
    service: NotebookService = Depends(get_notebook_service),
) -> dict:
    await service.apply(
        notebook_id,
        operations.move_cell_in_section,
        page_index,
        section,
        body.old_index,
        body.new_index,
    )
    return await service.snapshot(notebook_id)


@router.patch("/{notebook_id}/pages/{page_index}/{section}/cells/{cell_index}")
async def update_cell(
    notebook_id: str,
    page_index: int,
    section: SectionKind,
    cell_index: int,
    body: UpdateCellRequest,
    service: NotebookService = Depends(get_notebook_service),
) -> dict:
    cell = await service.apply(
        notebook_id,
        operations.update_cell,
        page_index,
        section,
        cell_index,
        source=body.source,
        name=body.name,
    )
    return cell.model_dump(mode="json")


@router.put("/{notebook_id}/pages/{page_index}/{section}/cells/{cell_index}/size")
async def resize_cell(
    notebook_id: str,
    page_index: int,
    section: SectionKind,
    cell_index: int,
    body: ResizeCellRequest,
    service: NotebookService = Depends(get_notebook_service),
) -> dict:
    report = await service.apply(
        notebook_id, operations.resize_cell, page_index, section, cell_index, body.size
    )
    return {"reflow": [asdict(report)]}


@router.delete("/{notebook_id}/pages/{page_index}/{section}/cells/{cell_index}")
async def delete_cell(
    notebook_id: str,
    page_index: int,
    section: SectionKind,
    cell_index: int,
    service: NotebookService = Depends(get_notebook_service),
) -> dict:
    cell = await service.apply(
        notebook_id, operations.delete_cell, page_index, section, cell_index
    )
    return {"deleted": cell.id}


@router.post("/{notebook_id}/cells/move")
async def relocate_cell(
    notebook_id: str,
    body: RelocateCellRequest,
    service: NotebookService = Depends(get_notebook_service),
) -> dict:
    source = operations.CellLocation(
        body.source.page_index, body.source.section, body.source.cell_index
    )
    destination = operations.SectionLocation(
        body.destination.page_index, body.destination.section
    )
    await service.apply(notebook_id, operations.relocate_cell, source, destination)
    return await service.snapshot(notebook_id)


# -- Geometry --


@router.put("/{notebook_id}/paper")
async def change_paper(
    notebook_id: str,
    body: ChangePaperRequest,
    service: NotebookService = Depends(get_notebook_service),
) -> dict:
    """Resize the paper from a preset or explicit dimensions, reflowing every page."""
    if body.preset is not None:
        reports = await service.apply(
            notebook_id, operations.change_paper, body.preset, body.orientation
        )
    else:
        reports = await service.apply(
            notebook_id,
            operations.change_dimensions,
            body.width,
            body.height,
            body.name,
            body.orientation,
        )
    return {
        "reflow": [asdict(report) for report in reports],
        "page_count": service.get(notebook_id).page_count,
    }
