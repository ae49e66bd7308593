"""Schemas de Match e MatchPlayer"""
from pydantic import ConfigDict, Field, StrictBool, StrictInt, field_validator, model_validator
from typing import List, Optional
from datetime import datetime
from app.schemas.base import CamelInput, Count
from app.schemas.common import PlayerSummary, MatchSummary, ParticipationFields


class MatchPlayerCreate(CamelInput):
    """Participante informado na criação da partida"""

    # o cliente web envia chaves extras (ex.: ownGoalScored) que são ignoradas
    model_config = ConfigDict(extra="ignore")

    player_id: StrictInt
    team: StrictBool
    gamelles_scored: Count = 0
    own_goals_scored: Count = 0
    is_player_of_the_match: StrictBool = False

    @field_validator("gamelles_scored", "own_goals_scored", "is_player_of_the_match", mode="before")
    @classmethod
    def unset_as_default(cls, value, info):
        # null conta como não informado
        if value is None:
            return False if info.field_name == "is_player_of_the_match" else 0
        return value


class MatchCreate(CamelInput):
    """Schema para criação de Match com seus participantes"""

    model_config = ConfigDict(extra="ignore")

    white_team_score: Count
    black_team_score: Count
    date: Optional[datetime] = None
    players: List[MatchPlayerCreate] = Field(..., min_length=1)

    @model_validator(mode="after")
    def unique_players(self):
        player_ids = [participant.player_id for participant in self.players]
        if len(player_ids) != len(set(player_ids)):
            raise ValueError("a player can only appear once per match")
        return self


class MatchUpdate(CamelInput):
    """Placar e data; aplicado via ledger"""
    white_team_score: Optional[Count] = None
    black_team_score: Optional[Count] = None
    date: Optional[datetime] = None


class MatchPlayerUpdate(CamelInput):
    """Campos editáveis de uma participação; aplicado via ledger"""
    team: Optional[StrictBool] = None
    gamelles_scored: Optional[Count] = None
    own_goals_scored: Optional[Count] = None
    is_player_of_the_match: Optional[StrictBool] = None


class MatchPlayerResponse(ParticipationFields):
    """Participação com o jogador"""
    player: PlayerSummary


class MatchPlayerDetail(MatchPlayerResponse):
    """Participação com jogador e partida"""
    match: MatchSummary


class MatchResponse(MatchSummary):
    """Schema de resposta de Match"""
    players: List[MatchPlayerResponse] = []
