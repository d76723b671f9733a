"""
API routes for computing equipment chains.
"""

from fastapi import APIRouter, HTTPException

from airchain.engine.chain import default_chain
from airchain.engine.persistence import chain_from_document, chain_state, chain_to_document
from airchain.models.chain import ChainDocument, ChainState

router = APIRouter(prefix="/api/v1", tags=["chain"])


@router.post("/chain/compute", response_model=ChainState)
async def compute_chain(document: ChainDocument) -> ChainState:
    """
    Compute a chain document.

    Propagates air states through every unit, honouring locked inlets, and
    returns each unit's inlet/outlet air, results, warnings and the total
    pressure loss.
    """
    try:
        return chain_state(chain_from_document(document))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")


@router.get("/chain/default", response_model=ChainDocument)
async def get_default_chain() -> ChainDocument:
    """Document for the starter equipment line-up."""
    return chain_to_document(default_chain())
