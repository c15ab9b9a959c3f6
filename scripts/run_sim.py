"""Simple demo runner for the simulation core."""
from simcore import DELETE, EventManager, Reschedule


def main():
    manager = EventManager()

    def countdown(label, remaining):
        # Each call consumes one tick; reschedule until the count runs out.
        state = {"left": remaining}

        def action(t):
            print(f"{label} fired at t={t} ({state['left']} left)")
            state["left"] -= 1
            if state["left"] <= 0:
                return DELETE
            return Reschedule(t + 7)

        return action

    manager.schedule(0, countdown("quick", 2))
    manager.schedule(3, countdown("slow", 4))

    print("Running simulation...")
    executor = manager.run(0, 100, 10, log_sink=print, stop_when_drained=True)
    print(f"Done at t={executor.current_time} after {executor.dispatched} event(s)")


if __name__ == "__main__":
    main()
