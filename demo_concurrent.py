import asyncio

from bazar.fallback import FallbackCatalog
from bazar.gateway import ProductGateway
from bazar.inventory import InventoryEvent, InventorySync
from bazar.logging_config import setup_logging
from bazar.session import Session


def report(event: InventoryEvent):
    names = ", ".join(p.name for p in event.products) or "-"
    note = f" [{event.notice.level}] {event.notice.message}" if event.notice else ""
    print(f"{event.phase.value:8} {len(event.products)} products: {names}{note}")


async def main():
    setup_logging()
    async with ProductGateway("http://127.0.0.1:8085") as gateway, FallbackCatalog() as fallback:
        sync = InventorySync(gateway, fallback, Session(user_email="admin@example.com", role="admin"))
        sync.subscribe(report)
        await sync.load()

        draft = {
            "price": 25, "stock": 3, "categoryId": "general",
            "image": "https://example.com/p.jpg", "description": "demo",
        }
        first = await sync.create({**draft, "name": "Canvas Tote"})

        # A delete issued while two creates are still in flight
        print("\n⚡ Interleaving create/create/delete...")
        await asyncio.gather(
            sync.create({**draft, "name": "Wool Scarf"}),
            sync.delete(first.id),
            sync.create({**draft, "name": "Leather Belt"}),
        )

        print("\n📦 Final list:", [p.name for p in sync.products])
        sync.close()

if __name__ == "__main__":
    asyncio.run(main())
