FIRST_NAMES: list[str] = [
    "Anong", "Boonmee", "Chai", "Daeng", "Fah", "Kanya", "Kittisak", "Lamai",
    "Malee", "Nattapong", "Niran", "Orathai", "Pakorn", "Pim", "Ratana", "Sakda",
    "Somchai", "Sunee", "Tawan", "Thida", "Udom", "Wanida", "Wichai", "Yupa",
    "Alice", "Ben", "Carla", "David", "Elena", "Farid", "Grace", "Hugo",
    "Ines", "Jonas", "Keiko", "Luis", "Maya", "Nikhil", "Olga", "Pedro",
    "Quinn", "Rosa", "Samir", "Tara", "Umar", "Vera", "Wen", "Ximena",
    "Yara", "Zane", "Amara", "Bruno", "Chloe", "Dmitri", "Esme", "Felix",
    "Greta", "Hamid", "Iris", "Jude", "Kofi", "Lena", "Mateo", "Noor",
]
