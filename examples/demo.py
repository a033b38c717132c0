import numpy as np

from macrofloat import BigFloat, NotationFormat, format_value, from_array, parse, to_array, view_fields


def main() -> None:
	x = from_array(np.array([0.0, -0.0, 0.1, 0.25, 1.0, -1.0, 1234.5, 1e300, np.inf, -np.inf, np.nan]))

	print("Original:", [str(v) for v in x])
	print("Back to float64:", to_array(x))

	fields = view_fields(x)
	print("Fields sample (first 5):")
	print(fields[:5])

	counter = BigFloat(1.0, 300)
	for _ in range(4):
		counter *= counter
	print("Counter after 4 squarings:", counter, "as float:", counter.to_f64())

	tower = BigFloat(1.0, (1 << 62) - 1)
	for _ in range(3):
		tower *= tower
	print("Escalated:", tower, "escalated:", tower.is_escalated)

	print("exp(1e50):", BigFloat(1.0, 50).exp())
	print("sqrt(4e99):", BigFloat(4.0, 99).sqrt())
	print("log10(1e1000):", BigFloat(1.0, 1000).log10())
	print("Nested parse:", parse("1.23e4.56e78"))
	print("Three digits:", format_value(parse("3.14159e1200"), NotationFormat(precision=3)))


if __name__ == "__main__":
	main()
