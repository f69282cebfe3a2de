EXAMPLES = {
    "healthy": {
        "incomeMonthly": 6000,
        "rentMonthly": 1200,
        "utilitiesMonthly": 200,
        "transportMonthly": 300,
        "foodMonthly": 500,
        "debtMonthly": 200,
        "subscriptionsMonthly": 30,
        "savingsBalance": 15000,
    },
    "tight": {
        "incomeMonthly": 4000,
        "rentMonthly": 1600,
        "utilitiesMonthly": 200,
        "transportMonthly": 350,
        "foodMonthly": 600,
        "debtMonthly": 400,
        "subscriptionsMonthly": 60,
        "savingsBalance": 3000,
    },
    "bad": {
        "incomeMonthly": 3000,
        "rentMonthly": 1500,
        "utilitiesMonthly": 150,
        "transportMonthly": 400,
        "foodMonthly": 600,
        "debtMonthly": 300,
        "subscriptionsMonthly": 80,
        "savingsBalance": 1000,
    },
    "zeroIncome": {
        "incomeMonthly": 0,
        "rentMonthly": 1000,
        "utilitiesMonthly": 100,
        "transportMonthly": 200,
        "foodMonthly": 400,
        "debtMonthly": 0,
        "subscriptionsMonthly": 20,
        "savingsBalance": 500,
    },
    "zeroExpenses": {
        "incomeMonthly": 3000,
        "rentMonthly": 0,
        "utilitiesMonthly": 0,
        "transportMonthly": 0,
        "foodMonthly": 0,
        "debtMonthly": 0,
        "subscriptionsMonthly": 0,
        "savingsBalance": 2000,
    },
    "rentHeavy": {
        "incomeMonthly": 5000,
        "rentMonthly": 2500,
        "utilitiesMonthly": 150,
        "transportMonthly": 200,
        "foodMonthly": 400,
        "debtMonthly": 0,
        "subscriptionsMonthly": 20,
        "savingsBalance": 4000,
    },
}

SAMPLE_TRADEOFF = {
    "optionA": {"rentMonthly": 1800, "transportMonthly": 120, "commuteTimeMins": 20},
    "optionB": {"rentMonthly": 1300, "transportMonthly": 350, "commuteTimeMins": 55},
}
