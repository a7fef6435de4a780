from .collect_files import collect_files, keep_downloaded

__all__ = ["collect_files", "keep_downloaded"]
