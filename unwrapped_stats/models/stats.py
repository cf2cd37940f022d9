"""StatsResult model definition"""
from typing import Optional, Tuple
from pydantic import AliasChoices, AliasGenerator, BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

class RankedEntity(BaseModel):
    """
    One row of a top list.

    Validation also accepts the key names written by older processed stats
    files (name, spotify_uri, track_name/album_name) and camelCase keys.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    key: str = Field(validation_alias=AliasChoices('key', 'name'))
    display_name: Optional[str] = Field(
        None,
        validate_default=True,
        validation_alias=AliasChoices('display_name', 'displayName', 'track_name', 'album_name'),
    )
    artist_name: Optional[str] = Field(None, validation_alias=AliasChoices('artist_name', 'artistName'))
    playtime_ms: int = Field(0, ge=0, validation_alias=AliasChoices('playtime_ms', 'playtimeMs'))
    play_count: int = Field(0, ge=0, validation_alias=AliasChoices('play_count', 'playCount'))
    playtime_minutes: Optional[int] = Field(
        None,
        validate_default=True,
        validation_alias=AliasChoices('playtime_minutes', 'playtimeMinutes'),
    )
    uri: Optional[str] = Field(None, validation_alias=AliasChoices('uri', 'spotify_uri', 'spotifyUri'))

    @field_validator('display_name', mode='after')
    @classmethod
    def _display_name_defaults_to_key(cls, value: Optional[str], info: ValidationInfo) -> Optional[str]:
        return value if value is not None else info.data.get('key')

    @field_validator('playtime_minutes', mode='after')
    @classmethod
    def _minutes_from_ms(cls, value: Optional[int], info: ValidationInfo) -> int:
        if value is not None:
            return value
        return info.data.get('playtime_ms', 0) // 60000

class StatsResult(BaseModel):
    """
    Immutable snapshot of listening statistics for one date window.

    Attributes:
        year: Calendar year the snapshot was computed in
        total_streams: Number of plays in scope
        unique_songs / unique_artists / unique_albums: Distinct entity keys
        total_playtime_ms: Sum of played milliseconds
        total_minutes / total_hours: Floored views of total_playtime_ms
        top_artists / top_songs / top_albums: Sorted by descending play count
    """
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=AliasGenerator(validation_alias=to_camel),
    )

    year: Optional[int] = None
    total_streams: int = 0
    unique_songs: int = 0
    unique_artists: int = 0
    unique_albums: int = 0
    total_playtime_ms: int = 0
    total_minutes: int = 0
    total_hours: int = 0
    top_artists: Tuple[RankedEntity, ...] = ()
    top_songs: Tuple[RankedEntity, ...] = ()
    top_albums: Tuple[RankedEntity, ...] = ()

    def truncated(self, limit: Optional[int]) -> "StatsResult":
        """Copy with every top list cut to `limit` rows; totals are untouched"""
        if not limit:
            return self
        return self.model_copy(update={
            'top_artists': self.top_artists[:limit],
            'top_songs': self.top_songs[:limit],
            'top_albums': self.top_albums[:limit],
        })
