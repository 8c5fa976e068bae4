"""
Bond Valuation Engine

Modules:
- engine: validated inputs, present-value pricing, cash-flow schedule, par/premium/discount
- validation: calculator range table + field error messages
- cashflows: schedule / discounting / chart tables (pandas)
- report: text renderers (summary, equation, table)
- state: immutable calculator state + session dispatcher
- scenarios: yield and coupon shock grids
- config: environment-driven defaults
- utils: period count, discount factors, logging setup
"""
