"""
App layer: 로컬 API 서버 (FastAPI).

역할:
- 표시 계층 요청 → Workspace 호출
- 디렉터리 선택 협력자, 이벤트 발행
- ⚠️ 저장소 정합성 로직 없음 (core에 위임)
"""
