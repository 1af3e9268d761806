"""
gke_sa_kit
----------

GKE 클러스터 관리용 GCP 서비스 계정을 준비하는 CLI 패키지.
gcloud 로그인, 프로젝트 선택, 서비스 계정 get-or-create, 키 파일 저장까지를
한 번의 명령으로 처리하는 것을 목표로 한다.
"""

__all__ = [
    "config",
    "orchestrator",
]
