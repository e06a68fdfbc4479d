from datetime import datetime, timezone


def utc_now() -> datetime:
    """Horodatage UTC avec fuseau (les colonnes datetime refusent les valeurs naïves)."""
    return datetime.now(timezone.utc)


def start_of_month(moment: datetime) -> datetime:
    """Premier instant du mois de ``moment``, dans le même fuseau."""
    return moment.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
