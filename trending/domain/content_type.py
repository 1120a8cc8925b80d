from enum import Enum


class ContentType(str, Enum):
    # 길이 기준(60초)으로 나뉘는 두 종류. 한 수집 회차에서 영상은 둘 중 하나에만 속한다.
    SHORT = "short"
    LONG = "long"
