from pydantic import BaseModel, Field
from typing import List, Optional


class StockMovementRow(BaseModel):
    """Linha do relatório mensal de movimentos de stock"""
    id: int
    r_type: str
    r_order_date: Optional[str] = None
    r_order_no: Optional[str] = None
    r_sku: Optional[str] = None
    r_description: Optional[str] = None
    r_batch: Optional[str] = None
    r_qty: int = 0
    r_weight: Optional[str] = None
    entry_date: Optional[str] = None


class KpiData(BaseModel):
    total_items: int = 0
    total_bins: int = 0
    occupied_bins: int = 0
    pending_inbound: int = 0
    pending_dispatch: int = 0


class UrgentTask(BaseModel):
    id: int
    type: str
    reference: str
    due_date: Optional[str] = None


class DashboardData(BaseModel):
    """KPIs e tarefas urgentes do dashboard"""
    kpi: KpiData
    urgent_tasks: List[UrgentTask] = Field(default_factory=list)
