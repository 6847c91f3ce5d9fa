# /scripts/cli_flow_check.py
from __future__ import annotations
import argparse, sys, time, uuid, datetime as dt
from pathlib import Path

from clients.inventory_client import InventoryClient, InventoryClientError

def print_step(title):
    print(f"\n=== {title} ===")

def sample_product(brand: str, days_to_expiry: int) -> dict:
    expiry = dt.datetime.now(dt.timezone.utc).date() + dt.timedelta(days=days_to_expiry)
    return {
        "code": f"SMOKE-{uuid.uuid4().hex[:6].upper()}",
        "batch": "L-001",
        "name": "Esmalte Sintetico Blanco",
        "brand": brand,
        "category": "Esmalte",
        "presentation": "1 gal",
        "expiryDate": expiry.isoformat(),
        "quantity": "4",
        "unitPrice": "18,75",
        "comment": "cli_flow_check",
    }

def do_create(cli: InventoryClient, brand: str, days: int) -> dict:
    print_step("CREATE POST /products")
    created = cli.create_product(sample_product(brand, days))
    print(f"id={created['id']} code={created['code']} unitPrice={created['unitPrice']}")
    return created

def do_list(cli: InventoryClient, status: str | None):
    print_step(f"LIST GET /products?status={status or ''}")
    items = cli.list_products(status)
    print(f"{len(items)} products")
    for i, it in enumerate(items[:5], 1):
        print(f"{i:2d}. {it['code']} {it['name']} — {it['status']} ({it['daysLeft']}d)")
    return items

def do_report(cli: InventoryClient, brand: str, status: str, out: Path):
    print_step(f"REPORT GET /reports/proforma?brand={brand}&status={status}")
    t0 = time.perf_counter()
    pdf = cli.download_proforma(brand, status)
    ms = (time.perf_counter() - t0) * 1000
    out.write_bytes(pdf)
    print(f"{len(pdf)} bytes in {ms:.0f} ms -> {out}")

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Smoke flow against a running inventory API")
    ap.add_argument("--base", default="http://localhost:8000")
    ap.add_argument("--brand", default="SmokeBrand")
    ap.add_argument("--days", type=int, default=5, help="days until the sample expires")
    ap.add_argument("--status", default="todos")
    ap.add_argument("--out", type=Path, default=Path("proforma_smoke.pdf"))
    ap.add_argument("--keep", action="store_true", help="do not delete the sample product")
    args = ap.parse_args(argv)

    cli = InventoryClient(args.base)
    try:
        created = do_create(cli, args.brand, args.days)
        do_list(cli, None if args.status == "todos" else args.status)
        do_report(cli, args.brand, args.status, args.out)
        if not args.keep:
            print_step("DELETE /products/{id}")
            cli.delete_product(created["id"])
            print("deleted")
    except InventoryClientError as e:
        print(f"FAILED: {e}")
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
