"""API routes — thin controllers that delegate to the use case."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from completion_context.domain.entities import ExternalSnippet, Position, RangeInFile
from completion_context.domain.value_objects import CompletionOptions
from completion_context.infrastructure.definition_index import DocumentDefinitionLookup
from completion_context.infrastructure.tree_sitter_parser import TreeSitterParser
from completion_context.interface.dependencies import (
    get_assembler,
    get_default_options,
    get_parser,
)
from completion_context.interface.schemas import ErrorResponse, PromptRequest, PromptResponse
from completion_context.services.context_assembler import ContextAssembler

router = APIRouter()


@router.post(
    "/prompt",
    response_model=PromptResponse,
    responses={
        422: {"model": ErrorResponse, "description": "Invalid request body or completion options"},
        500: {"model": ErrorResponse, "description": "Unexpected failure while assembling"},
    },
)
async def construct_prompt(
    body: PromptRequest,
    assembler: ContextAssembler = Depends(get_assembler),
    parser: TreeSitterParser = Depends(get_parser),
    default_options: CompletionOptions = Depends(get_default_options),
) -> PromptResponse:
    """Assemble the budgeted completion prompt for a cursor position."""
    options = CompletionOptions.from_mapping(body.options, defaults=default_options)

    # The file being edited is always searchable for definitions.
    documents = {d.filepath: d.contents for d in body.open_documents}
    documents[body.filepath] = body.prefix + body.suffix
    lookup = DocumentDefinitionLookup(parser, documents)

    result = await assembler.construct_prompt(
        filepath=body.filepath,
        full_prefix=body.prefix,
        full_suffix=body.suffix,
        clipboard_text=body.clipboard_text,
        language=None,
        get_definition=lookup,
        options=options,
        recently_edited_ranges=[
            RangeInFile(
                filepath=r.filepath,
                start=Position(r.start.line, r.start.character),
                end=Position(r.end.line, r.end.character),
                contents=r.contents,
            )
            for r in body.recently_edited_ranges
        ],
        recently_edited_documents=[
            ExternalSnippet(filepath=d.filepath, contents=d.contents)
            for d in body.recently_edited_documents
        ],
    )
    return PromptResponse(
        prefix=result.prefix,
        suffix=result.suffix,
        use_fim=result.use_fim,
        complete_multiline=result.complete_multiline,
    )
