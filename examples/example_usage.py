"""Example: evaluate attendance through the container, without Flask."""

from datetime import date

from attendance_policy.container import build_container
from attendance_policy.snapshot.loader import load_snapshot


def main():
    repository = load_snapshot("examples/policy_snapshot.yaml", tenant_id="acme")
    container = build_container(repository=repository)

    policy = repository.get_work_schedule_policy("ws-office")
    print(container.work_schedule_evaluator.validate_clock_in(policy, "09:20", date(2025, 1, 6)))
    print(container.shift_scheduler.get_current_shift("emp-2", date(2025, 1, 8)))
    print(container.geofence_validator.validate_clock_in(10.7771, 106.7012))


if __name__ == "__main__":
    main()
