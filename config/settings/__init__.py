"""Settings package for the motel pricing project.

`base` holds everything shared, including the pricing, hold and
notification knobs read from the environment. `dev`, `prod` and `test`
override storage, mail and Celery for their environment.
"""
