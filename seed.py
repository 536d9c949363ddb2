"""
Script para popular o banco de dados com dados de desenvolvimento:
- 4 papéis e um utilizador por papel (password = <username>123)
- Armazém principal com racks A, B, C × 10 bins (A1..A10) e um depósito com rack D
- Categorias e itens do catálogo de equipamento de estádio
- Stock inicial em A1 e A2, aplicações de entrada e pedidos de expedição de exemplo
"""
from sqlalchemy.orm import Session
from datetime import date, timedelta
from models.database import SessionLocal, engine, Base, init_db
from models.bin import Bin
from models.dispatch import DispatchItem, DispatchRequest
from models.inbound import InboundApplication, InboundItem
from models.item import Category, Item
from models.movement import MovementType, StockMovement
from models.rack import Rack
from models.user import Role, User
from models.warehouse import Warehouse
from routers.deps import hash_password
from schemas.dispatch_schemas import DispatchStatus
from schemas.inbound_schemas import InboundItemStatus, InboundStatus
from services.codecs import row_to_letter

ROLES = [
    ("Administrator", "admin"),
    ("Manager", "manager"),
    ("Staff", "staff"),
    ("Customer", "customer"),
]

CATEGORIES = ["Audio", "Lighting", "Field Equipment", "Furniture", "Electronics"]

# (sku, nome, categoria, peso, tipo de armazenamento, qtd/palete, qtd/caixa)
ITEMS = [
    ("AUDIO-PA-SYS-01", "Professional PA System 2000W", "Audio", "45.0 kg", 1, 4, 1),
    ("LGT-SPOT-500", "LED Spotlight 500W", "Lighting", "5.5 kg", 2, 40, 4),
    ("FLD-CONE-ORG", "Safety Field Cones (Orange)", "Field Equipment", "2.0 kg", 2, 200, 20),
    ("SEAT-FOLD-VIP", "VIP Folding Stadium Seat", "Furniture", "8.0 kg", 1, 50, 5),
    ("SCORE-LED-LG", "Large LED Scoreboard Panel", "Electronics", "85.0 kg", 3, 2, 1),
]

MAIN_RACKS = 3
BINS_PER_RACK = 10


def populate(db: Session) -> None:
    """Cria os dados de desenvolvimento na sessão (sem commit)"""
    today = date.today()

    roles = {}
    for name, slug in ROLES:
        role = Role(name=name, slug=slug)
        db.add(role)
        roles[slug] = role
    db.flush()

    for _, slug in ROLES:
        db.add(User(
            name=slug.title(),
            username=slug,
            email=f"{slug}@avaraa.local",
            password_hash=hash_password(f"{slug}123"),
            role_id=roles[slug].id
        ))

    main = Warehouse(name="Main Warehouse", location="Riyadh")
    depot = Warehouse(name="Stadium Depot", location="Jeddah")
    db.add_all([main, depot])
    db.flush()

    bins = {}
    for row in range(1, MAIN_RACKS + 1):
        letter = row_to_letter(row)
        rack = Rack(warehouse_id=main.id, code=letter, label=f"Rack {letter}")
        db.add(rack)
        db.flush()
        for col in range(1, BINS_PER_RACK + 1):
            code = f"{letter}{col}"
            bin = Bin(rack_id=rack.id, code=code, label=f"Bin {code}", occupied=False)
            db.add(bin)
            bins[code] = bin

    depot_rack = Rack(warehouse_id=depot.id, code="D", label="Rack D")
    db.add(depot_rack)
    db.flush()
    for col in range(1, 5):
        db.add(Bin(rack_id=depot_rack.id, code=f"D{col}", label=f"Bin D{col}", occupied=False))

    categories = {}
    for name in CATEGORIES:
        category = Category(name=name)
        db.add(category)
        categories[name] = category
    db.flush()

    items = {}
    for sku, name, category, weight, storage_type, per_pallet, per_carton in ITEMS:
        item = Item(
            item_sku=sku,
            item_name=name,
            category_id=categories[category].id,
            weight=weight,
            storage_type=storage_type,
            qty_per_pallet=per_pallet,
            qty_per_carton=per_carton
        )
        db.add(item)
        items[sku] = item
    db.flush()

    # Stock inicial
    for code, sku, quantity, batch in [
        ("A1", "LGT-SPOT-500", 45, "B-2023-B"),
        ("A2", "FLD-CONE-ORG", 200, "B-2023-C"),
    ]:
        bin = bins[code]
        bin.occupied = True
        bin.item_id = items[sku].id
        bin.quantity = quantity
        bin.batch_id = batch
        db.add(StockMovement(
            item_id=items[sku].id,
            bin_id=bin.id,
            type=MovementType.INBOUND,
            quantity=quantity,
            order_no="GRN-OPENING",
            order_date=today.isoformat(),
            batch_id=batch
        ))

    pending = InboundApplication(
        inbound_number="GRN-0001",
        warehouse_id=main.id,
        expected_arrival_date=(today + timedelta(days=2)).isoformat(),
        status=InboundStatus.PENDING,
        notes="Stadium Supplies Co"
    )
    pending.items.append(InboundItem(item_id=items["SEAT-FOLD-VIP"].id, quantity=50, status=InboundItemStatus.PENDING))
    pending.items.append(InboundItem(item_id=items["AUDIO-PA-SYS-01"].id, quantity=4, status=InboundItemStatus.PENDING))

    verifying = InboundApplication(
        inbound_number="GRN-0002",
        warehouse_id=main.id,
        expected_arrival_date=today.isoformat(),
        status=InboundStatus.VERIFYING,
        notes="LightTech Industries"
    )
    verifying.items.append(InboundItem(item_id=items["LGT-SPOT-500"].id, quantity=20, status=InboundItemStatus.PENDING))
    db.add_all([pending, verifying])

    for number, status, days, priority in [
        ("DO-0001", DispatchStatus.PENDING, 1, "high"),
        ("DO-0002", DispatchStatus.PICKING, 2, "normal"),
        ("DO-0003", DispatchStatus.PACKED, 0, "high"),
    ]:
        order = DispatchRequest(
            order_number=number,
            status=status,
            due_date=(today + timedelta(days=days)).isoformat(),
            priority=priority
        )
        order.items.append(DispatchItem(
            item_id=items["LGT-SPOT-500"].id,
            warehouse_id=main.id,
            bin_id=bins["A1"].id,
            batch_id="B-2023-B",
            quantity=5
        ))
        db.add(order)

    db.flush()


def seed_database():
    """Popula o banco com os dados de desenvolvimento"""
    # Criar todas as tabelas
    init_db()

    db: Session = SessionLocal()
    try:
        # Verificar se já existe dados
        if db.query(Warehouse).count() > 0:
            print("Banco já possui dados. Use --force para recriar.")
            return

        populate(db)
        db.commit()
        print(f"✅ Seed concluído!")
        print(f"   - {db.query(User).count()} utilizadores criados")
        print(f"   - {db.query(Rack).count()} racks e {db.query(Bin).count()} bins criados")
        print(f"   - {db.query(Item).count()} itens criados")

    except Exception as e:
        db.rollback()
        print(f"❌ Erro ao fazer seed: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    import sys
    if "--force" in sys.argv:
        # Deletar tudo e recriar
        init_db()
        Base.metadata.drop_all(bind=engine)
        Base.metadata.create_all(bind=engine)
        print("⚠️  Banco recriado do zero")

    seed_database()
