from .fetch_skill_details import fetch_skill_details, fetch_skill_details_batch

__all__ = ["fetch_skill_details", "fetch_skill_details_batch"]
