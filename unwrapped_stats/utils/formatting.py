"""Display helpers for playtime, dates and Spotify links"""
from datetime import date
from typing import Optional

def format_time(ms: int) -> str:
    """Format milliseconds as 'Xh Ym'"""
    hours = ms // 3600000
    minutes = (ms % 3600000) // 60000
    return f"{hours}h {minutes}m"

def format_date_european(value: Optional[date]) -> str:
    """Format a date as dd/mm/yyyy, empty for None"""
    if not value:
        return ''
    return value.strftime('%d/%m/%Y')

def spotify_url(uri: Optional[str]) -> Optional[str]:
    """Convert spotify:track:XXXX to https://open.spotify.com/track/XXXX"""
    if not uri:
        return None
    parts = uri.split(':')
    if len(parts) >= 3:
        return f"https://open.spotify.com/{parts[1]}/{parts[2]}"
    return None
