"""
Password and token handling plus the register/login service.

- 'passwords': bcrypt hashing with cost factor 10, run off the event loop.
- 'tokens': HS256 JWTs carrying the user id, valid for one hour.
- 'service': 'AuthService' implementing registration and login.
"""
