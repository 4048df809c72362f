"""
지갑 충전용 포인트 팩 카탈로그

팩 ID는 지급 포인트 수와 같다. 가격은 결제 금액(NTD)이며 원장에는
포인트만 기록된다. 결제 연동이 생기면 이 목록을 DB 테이블로 옮길 수 있도록 분리했다.
"""

from typing import Dict, NamedTuple


class PointPackDefinition(NamedTuple):
    id: int
    label: str
    points: int
    price: int


POINT_PACKS: Dict[int, PointPackDefinition] = {
    pack.id: pack
    for pack in (
        PointPackDefinition(id=10, label="X10", points=10, price=10),
        PointPackDefinition(id=20, label="X20", points=20, price=20),
        PointPackDefinition(id=40, label="X40", points=40, price=25),
        PointPackDefinition(id=50, label="X50", points=50, price=40),
        PointPackDefinition(id=100, label="X100", points=100, price=80),
    )
}
