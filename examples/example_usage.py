"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; the attendance rules live in the services.
"""

from datetime import date

from src.self_attendance.self_attendance.common.datetime_utils import YearMonth
from src.self_attendance.self_attendance.container import build_container
from src.self_attendance.self_attendance.storage.memory_store import InMemoryKeyValueStore
from src.self_attendance.self_attendance.users.model import Identity
from src.self_attendance.self_attendance.users.session import SessionContext


def main():
    container = build_container(kv_store=InMemoryKeyValueStore())
    context = container.session_service.login(SessionContext(), Identity("demo", "Demo User"))

    container.attendance_service.toggle(context, date.today())
    print(container.attendance_service.summary(context))
    print(container.attendance_service.chart(context, YearMonth.of(date.today())).to_dict())
    print(container.attendance_service.export_csv(context))


if __name__ == "__main__":
    main()
