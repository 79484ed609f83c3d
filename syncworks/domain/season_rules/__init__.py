"""Season pricing rules: CRUD, date matching and price adjustment"""
