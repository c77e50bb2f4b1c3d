"""Instruction implementations: arithmetic, bit logic and data moves."""