# 컬렉션 인덱스 생성
# 앱 스타트업에서 한 번 ensure_indexes()를 await로 호출한다.

from recipe_app.core.config import settings
from recipe_app.db.init import get_db

async def ensure_indexes():
    col = get_db()[settings.MONGO_COLLECTION]

    # 라벨 $all 조회용 (멀티키)
    await col.create_index("dietLabels", name="dietLabels_1")
    await col.create_index("healthLabels", name="healthLabels_1")
