from pydantic import BaseModel, ConfigDict, Field

Quantity = int | float


def _first_text(*values: str) -> str:
    return next((v for v in values if v), "")


class FbaInventoryPartial(BaseModel):
    """
    One SKU's quantities as reported by the FBA inventory summaries feed.
    Duplicate listings of the same SKU are folded together with `+`.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    sku: str = Field(..., alias="sku")
    name: str = Field(default="", alias="name")
    asin: str = Field(default="", alias="asin")
    fnsku: str = Field(default="", alias="fnsku")
    fulfillable: Quantity = Field(default=0, alias="fulfillable")
    reserved: Quantity = Field(default=0, alias="reserved")
    unfulfillable: Quantity = Field(default=0, alias="unfulfillable")
    inbound_working: Quantity = Field(default=0, alias="inboundWorking")
    inbound_shipped: Quantity = Field(default=0, alias="inboundShipped")
    inbound_receiving: Quantity = Field(default=0, alias="inboundReceiving")
    total_inbound: Quantity = Field(default=0, alias="totalInbound")

    def __add__(self, other: "FbaInventoryPartial") -> "FbaInventoryPartial":
        if not isinstance(other, FbaInventoryPartial):
            return NotImplemented
        return FbaInventoryPartial(
            sku=self.sku or other.sku,
            name=_first_text(self.name, other.name),
            asin=_first_text(self.asin, other.asin),
            fnsku=_first_text(self.fnsku, other.fnsku),
            fulfillable=self.fulfillable + other.fulfillable,
            reserved=self.reserved + other.reserved,
            unfulfillable=self.unfulfillable + other.unfulfillable,
            inbound_working=self.inbound_working + other.inbound_working,
            inbound_shipped=self.inbound_shipped + other.inbound_shipped,
            inbound_receiving=self.inbound_receiving + other.inbound_receiving,
            total_inbound=self.total_inbound + other.total_inbound,
        )


class AwdInventoryPartial(BaseModel):
    """
    One SKU's quantities at the AWD warehousing tier.

    `awd_quantity` folds reserved units into on-hand, unlike FBA where reserved
    is kept apart; the AWD report does not split them at the same granularity.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    sku: str = Field(..., alias="sku")
    name: str = Field(default="", alias="name")
    awd_quantity: Quantity = Field(default=0, alias="awdQuantity")
    awd_inbound: Quantity = Field(default=0, alias="awdInbound")
    awd_replenishment: Quantity = Field(default=0, alias="awdReplenishment")

    def __add__(self, other: "AwdInventoryPartial") -> "AwdInventoryPartial":
        if not isinstance(other, AwdInventoryPartial):
            return NotImplemented
        return AwdInventoryPartial(
            sku=self.sku or other.sku,
            name=_first_text(self.name, other.name),
            awd_quantity=self.awd_quantity + other.awd_quantity,
            awd_inbound=self.awd_inbound + other.awd_inbound,
            awd_replenishment=self.awd_replenishment + other.awd_replenishment,
        )


class ChannelStock(BaseModel):
    """On-hand and inbound units for one SKU at a non-Amazon location (3PL, home)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    sku: str = Field(..., alias="sku")
    name: str = Field(default="", alias="name")
    on_hand: Quantity = Field(default=0, alias="onHand")
    inbound: Quantity = Field(default=0, alias="inbound")

    def __add__(self, other: "ChannelStock") -> "ChannelStock":
        if not isinstance(other, ChannelStock):
            return NotImplemented
        return ChannelStock(
            sku=self.sku or other.sku,
            name=_first_text(self.name, other.name),
            on_hand=self.on_hand + other.on_hand,
            inbound=self.inbound + other.inbound,
        )


class MergedInventoryRow(BaseModel):
    """
    The combined Amazon-side record for one SKU (FBA + AWD).
    `amazon_inbound` is the number consumers treat as the Amazon inbound pipeline.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    sku: str = Field(..., alias="sku")
    name: str = Field(default="", alias="name")
    asin: str = Field(default="", alias="asin")
    fnsku: str = Field(default="", alias="fnsku")
    fba_fulfillable: Quantity = Field(default=0, alias="fbaFulfillable")
    fba_reserved: Quantity = Field(default=0, alias="fbaReserved")
    fba_total: Quantity = Field(default=0, alias="fbaTotal")
    fba_inbound: Quantity = Field(default=0, alias="fbaInbound")
    awd_quantity: Quantity = Field(default=0, alias="awdQuantity")
    awd_inbound: Quantity = Field(default=0, alias="awdInbound")
    awd_replenishment: Quantity = Field(default=0, alias="awdReplenishment")
    amazon_total: Quantity = Field(default=0, alias="amazonTotal")
    amazon_inbound: Quantity = Field(default=0, alias="amazonInbound")


class SnapshotRow(BaseModel):
    """A single row of the multi-channel inventory snapshot, keyed by base SKU."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    sku: str = Field(..., alias="sku")
    name: str = Field(default="", alias="name")
    amazon_qty: Quantity = Field(default=0, alias="amazonQty")
    amazon_inbound: Quantity = Field(default=0, alias="amazonInbound")
    awd_qty: Quantity = Field(default=0, alias="awdQty")
    awd_inbound: Quantity = Field(default=0, alias="awdInbound")
    threepl_qty: Quantity = Field(default=0, alias="threeplQty")
    threepl_inbound: Quantity = Field(default=0, alias="threeplInbound")
    home_qty: Quantity = Field(default=0, alias="homeQty")
    total_inbound: Quantity = Field(default=0, alias="totalInbound")
    total_units: Quantity = Field(default=0, alias="totalUnits")
    weekly_velocity: Quantity = Field(default=0, alias="weeklyVelocity")
    days_of_supply: int = Field(default=999, alias="daysOfSupply")
    health: str = Field(default="unknown", alias="health")
