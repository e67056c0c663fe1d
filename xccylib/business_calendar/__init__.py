from .date_calculator import compute_maturity, get_spot_date

__all__ = ["compute_maturity", "get_spot_date"]
