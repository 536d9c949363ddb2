"""
Serviço de sugestão de localização para putaway:
primeiro bin livre, percorrendo racks e bins em ordem natural de código
"""
import logging
from typing import List, Optional
from schemas.location_schemas import BinResponse, PlacementResult, RackResponse, StorageLocation
from services.api_service import ApiService
from services.codecs import natural_key
from services.exceptions import ApiError

logger = logging.getLogger(__name__)


class PlacementService:
    """Resolve o primeiro (rack, bin) livre de um armazém"""

    def __init__(self, api: ApiService):
        self.api = api

    async def list_racks(self, warehouse_id: int) -> List[RackResponse]:
        return await self.api.list_all(
            "/racks", RackResponse.model_validate, warehouse_id=warehouse_id
        )

    async def list_bins(self, rack_id: int, warehouse_id: int) -> List[BinResponse]:
        return await self.api.list_all(
            f"/racks/{rack_id}/bins", BinResponse.model_validate, warehouse_id=warehouse_id
        )

    @staticmethod
    def sort_racks(racks: List[RackResponse]) -> List[RackResponse]:
        return sorted(racks, key=lambda r: natural_key(r.code))

    @staticmethod
    def sort_bins(bins: List[BinResponse]) -> List[BinResponse]:
        return sorted(bins, key=lambda b: natural_key(b.code))

    @staticmethod
    def first_free(rack: RackResponse, bins: List[BinResponse]) -> Optional[StorageLocation]:
        for bin in PlacementService.sort_bins(bins):
            location = StorageLocation.from_rack_bin(rack, bin)
            if not location.occupied:
                return location
        return None

    async def resolve(
        self,
        warehouse_id: int,
        racks: Optional[List[RackResponse]] = None,
    ) -> Optional[PlacementResult]:
        """
        Percorre os racks (ordem natural) e, em cada um, os bins (ordem natural);
        devolve o primeiro bin livre sem olhar para os racks seguintes.
        - falha ao buscar bins de um rack: o rack é ignorado e o scan continua
        - falha ao buscar os racks: propaga para quem chamou
        - None quando nenhum rack tem bin livre
        A sugestão reflete só o snapshot lido; o servidor revalida na confirmação.
        """
        if racks is None:
            racks = await self.list_racks(warehouse_id)

        for rack in self.sort_racks(racks):
            try:
                bins = await self.list_bins(rack.id, warehouse_id)
            except ApiError as e:
                logger.warning("Bins do rack %s indisponíveis, a saltar: %s", rack.code, e)
                continue

            location = self.first_free(rack, bins)
            if location is not None:
                logger.info(
                    "Sugestão de putaway no armazém %s: rack %s, bin %s",
                    warehouse_id, location.rack_code, location.bin_code,
                )
                return PlacementResult(
                    rack_id=location.rack_id,
                    bin_id=location.bin_id,
                    rack_code=location.rack_code,
                    bin_code=location.bin_code,
                )

        logger.info("Nenhum bin livre no armazém %s", warehouse_id)
        return None
