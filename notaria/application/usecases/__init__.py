"""
Use Cases Layer (Business Operations)

Structure
---------
usecases/
├── processes/      # Expedientes: alta, lectura, listados, estado, baja
└── users/          # Registro, login y autogestión de cuentas

Usage
-----
    from notaria.application.usecases.processes import CreateProcessUseCase
    from notaria.application.usecases.users import RegisterUserUseCase
"""
