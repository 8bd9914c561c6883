"""
Minimal client example.

Usage:
    GRAPHLINK_URI=https://countries.trevorblades.com/graphql python main.py
"""

import asyncio
import logging

from graphlink import HttpLink, Operation

QUERY = """
query Country($code: ID!) {
  country(code: $code) { name capital }
}
"""


async def main():
    logging.basicConfig(level=logging.DEBUG)
    link = HttpLink(headers={"user-agent": "graphlink-example"})
    try:
        result = await link.execute(
            Operation(query=QUERY, variables={"code": "NO"}, operation_name="Country")
        )
        print(result["data"])
    finally:
        await link.close()


if __name__ == "__main__":
    asyncio.run(main())
