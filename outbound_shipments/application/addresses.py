ADDRESS_FIELDS = ("street_1", "street_2", "city", "state", "zipcode", "country")

def format_address(
    street_1: str,
    street_2: str,
    city: str,
    state: str,
    zipcode: str,
    country: str,
) -> str:
    """Render address parts as a mailing block.

    Blank parts are dropped, so a shipment without a second street line
    or a state still renders cleanly:

        123 Main St
        Apt 4
        Oakland, CA 94607
        US
    """
    locality = (city or "").strip()
    region = " ".join(p for p in ((state or "").strip(), (zipcode or "").strip()) if p)
    if locality and region:
        locality = f"{locality}, {region}"
    else:
        locality = locality or region

    lines = [(street_1 or "").strip(), (street_2 or "").strip(), locality, (country or "").strip()]
    return "\n".join(line for line in lines if line)
