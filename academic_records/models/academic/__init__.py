from .catalog import Speciality, Career, Cycle, Subject

__all__ = ["Speciality", "Career", "Cycle", "Subject"]
