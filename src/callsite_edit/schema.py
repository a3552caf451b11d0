from __future__ import annotations

from pydantic import BaseModel


class RewriteSummaryDTO(BaseModel):
    operation: str
    fn_name: str
    source_file: str
    lines: int
    call_sites: int
    edited_call_sites: int
