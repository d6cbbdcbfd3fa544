"""
Squad chemistry debug schemas.

The dashboard computes chemistry client-side and posts the breakdown here
for rendering; these models only describe that pre-computed document.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ChemDebugRow(BaseModel):
    """One placed player in the chemistry breakdown."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    slot: str
    in_pos: bool = Field(False, alias="inPos")
    positions: str = ""
    club: Optional[str] = None
    nation: Optional[str] = None
    league: Optional[str] = None


class ChemDebug(BaseModel):
    """Chemistry counts and contributor lists for the current squad."""
    model_config = ConfigDict(populate_by_name=True)

    clubs: Dict[str, int] = Field(default_factory=dict)
    nations: Dict[str, int] = Field(default_factory=dict)
    leagues: Dict[str, int] = Field(default_factory=dict)
    in_pos_contributors: List[str] = Field(default_factory=list, alias="inPosContributors")
    icons: List[str] = Field(default_factory=list)
    heroes: List[str] = Field(default_factory=list)
    rows: List[ChemDebugRow] = Field(default_factory=list)


class ChemDebugRequest(BaseModel):
    """Body of POST /widgets/chem-debug."""
    model_config = ConfigDict(populate_by_name=True)

    debug: Optional[ChemDebug] = None
    per_player_chem: Dict[str, int] = Field(default_factory=dict, alias="perPlayerChem")
