"""
HTTP benchmark for the catalogue read endpoints.

For each endpoint the first request is timed on its own (cold: the
cache entry is absent or was just invalidated) and then N more requests
are timed (warm: served from the cache, which shows up as
``X-Query-Count: 0``).
"""
import argparse
import asyncio
import statistics
import time

import httpx

BASE_URL = "http://localhost:8000"
API = "/api/v1"


async def _timed_get(client: httpx.AsyncClient, path: str) -> tuple[float, httpx.Response]:
    start = time.perf_counter()
    resp = await client.get(f"{BASE_URL}{path}")
    return (time.perf_counter() - start) * 1000, resp


async def benchmark_endpoint(client: httpx.AsyncClient, name: str, path: str, iterations: int = 50):
    cold_ms, cold = await _timed_get(client, path)
    if cold.status_code != 200:
        return {"name": name, "error": f"HTTP {cold.status_code}"}

    times = []
    query_counts = []
    errors = 0
    for _ in range(iterations):
        try:
            elapsed, resp = await _timed_get(client, path)
        except httpx.HTTPError:
            errors += 1
            continue
        if resp.status_code != 200:
            errors += 1
            continue
        times.append(elapsed)
        query_counts.append(int(resp.headers.get("X-Query-Count", "0")))

    if not times:
        return {"name": name, "error": f"All {iterations} requests failed"}

    ordered = sorted(times)
    return {
        "name": name,
        "cold_ms": round(cold_ms, 2),
        "cold_queries": cold.headers.get("X-Query-Count", "?"),
        "avg_ms": round(statistics.mean(times), 2),
        "p50_ms": round(ordered[len(ordered) // 2], 2),
        "p95_ms": round(ordered[int(len(ordered) * 0.95)], 2),
        "warm_queries": round(statistics.mean(query_counts), 1),
        "errors": errors,
    }


async def _first_id(client: httpx.AsyncClient, entity: str) -> str | None:
    resp = await client.get(f"{BASE_URL}{API}/{entity}", params={"pageSize": 1})
    items = resp.json().get("items", []) if resp.status_code == 200 else []
    return items[0]["id"] if items else None


async def run_benchmark(iterations: int = 50):
    print("=" * 88)
    print(f"Coffee API benchmark: {iterations} warm iterations per endpoint")
    print(f"Target: {BASE_URL}")
    print("=" * 88)

    async with httpx.AsyncClient() as client:
        try:
            resp = await client.get(f"{BASE_URL}/health")
        except httpx.HTTPError as e:
            print(f"ERROR: Cannot connect to {BASE_URL}: {e}")
            return
        if resp.status_code != 200:
            print(f"ERROR: Health check failed ({resp.status_code})")
            return
        print(f"Health: {resp.json()}")

        endpoints = []
        for entity in ("coffee", "category", "ingredient"):
            endpoints.append((f"GET {API}/{entity}", f"{API}/{entity}"))
            endpoints.append((f"GET {API}/{entity}?search=a", f"{API}/{entity}?search=a&pageSize=50"))
            entity_id = await _first_id(client, entity)
            if entity_id:
                endpoints.append((f"GET {API}/{entity}/{{id}}", f"{API}/{entity}/{entity_id}"))

        print()
        print(f"{'Endpoint':<40} {'Cold':>9} {'Q':>3} {'Avg':>9} {'P50':>9} {'P95':>9} {'Q':>5} {'Err':>4}")
        print("-" * 88)
        for name, path in endpoints:
            r = await benchmark_endpoint(client, name, path, iterations)
            if "error" in r:
                print(f"{r['name']:<40} {r['error']:>9}")
                continue
            print(
                f"{r['name']:<40} "
                f"{r['cold_ms']:>7.1f}ms {r['cold_queries']:>3} "
                f"{r['avg_ms']:>7.1f}ms {r['p50_ms']:>7.1f}ms {r['p95_ms']:>7.1f}ms "
                f"{r['warm_queries']:>5} {r['errors']:>4}"
            )
        print("-" * 88)


def main():
    global BASE_URL
    parser = argparse.ArgumentParser(description="Benchmark the Coffee API read path")
    parser.add_argument("-n", "--iterations", type=int, default=50, help="Warm iterations per endpoint")
    parser.add_argument("--base-url", default=BASE_URL, help="API base URL")
    args = parser.parse_args()

    BASE_URL = args.base_url
    asyncio.run(run_benchmark(args.iterations))


if __name__ == "__main__":
    main()
