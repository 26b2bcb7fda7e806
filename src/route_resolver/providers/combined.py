from __future__ import annotations

from typing import Optional

from route_resolver.contracts.route_contract import GeoBounds, Tier
from route_resolver.errors import ConfigurationError


def build_chain(provider_str: str, settings, bounds: Optional[GeoBounds] = None):
    """
    Build a tier chain from a string like:
      "osrm+directions"   (production: OSRM, then the backend)
      "osrm"
      "mock"
      "mock+directions"

    Order in the string is tier order. Returns a RouteProviderChain; the
    straight-line fallback is always implied at the end.
    """
    tokens = [t.strip().lower() for t in provider_str.split("+") if t.strip()]
    if not tokens:
        tokens = ["osrm", "directions"]

    # Local imports to avoid circular imports
    from route_resolver.providers.chain import RouteProviderChain
    from route_resolver.providers.directions import DirectionsRouteProvider
    from route_resolver.providers.mock import MockRouteProvider
    from route_resolver.providers.osrm import OSRMRouteProvider

    tiers = [Tier.PRIMARY, Tier.SECONDARY]
    if len(tokens) > len(tiers):
        raise ConfigurationError(f"At most {len(tiers)} network tiers are supported, got '{provider_str}'")

    providers = []
    for t, tier in zip(tokens, tiers):
        if t == "osrm":
            prov = OSRMRouteProvider(
                base_url=settings.osrm_base_url,
                profile=settings.osrm_profile,
                timeout_s=settings.primary_timeout_s,
                user_agent=settings.user_agent,
            )
        elif t == "directions":
            prov = DirectionsRouteProvider(
                base_url=settings.directions_base_url,
                timeout_s=settings.secondary_timeout_s,
                user_agent=settings.user_agent,
            )
        elif t == "mock":
            prov = MockRouteProvider()
        else:
            raise ConfigurationError(f"Unknown provider token: '{t}' (supported: osrm, directions, mock)")
        # position in the string decides the tier label
        prov.tier = tier
        providers.append(prov)

    return RouteProviderChain(providers, bounds if bounds is not None else settings.bounds())
