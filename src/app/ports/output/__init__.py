from .transit_info_provider import ITransitInfoProvider

__all__ = ["ITransitInfoProvider"]
