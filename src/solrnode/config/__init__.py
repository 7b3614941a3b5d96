from solrnode.config.settings import Settings

__all__ = ["Settings"]
